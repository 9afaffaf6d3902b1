"""
Shared router dependencies.
"""

from typing import Optional

from fastapi import Header, HTTPException, Request

from propsearch.models import RequestContext
from propsearch.services.search import LeaseSearchOrchestrator, PropertySearchOrchestrator
from propsearch.services.storage import GCSUrlSigner


async def get_request_context(
    x_user_id: Optional[str] = Header(None),
    x_app_role: Optional[str] = Header(None),
    x_account_id: Optional[str] = Header(None)
) -> RequestContext:
    """Caller identity from the gateway headers; 401 without a user id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return RequestContext(
        user_id=x_user_id,
        role=x_app_role or "user",
        account_id=x_account_id or None,
    )


def get_property_search(request: Request) -> PropertySearchOrchestrator:
    return request.app.state.property_search


def get_lease_search(request: Request) -> LeaseSearchOrchestrator:
    return request.app.state.lease_search


def get_signer(request: Request) -> GCSUrlSigner:
    return request.app.state.signer
