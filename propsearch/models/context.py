"""Caller identity forwarded to the database for row-level security"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class RequestContext(BaseModel):
    """Authenticated caller"""
    model_config = ConfigDict(frozen=True)

    user_id: str
    role: str = "user"
    account_id: Optional[str] = None

    def to_settings(self) -> dict:
        """Transaction-local settings read by the database's RLS policies."""
        return {
            "app.user_id": self.user_id,
            "app.role": self.role,
            "app.account_id": self.account_id or "",
        }
