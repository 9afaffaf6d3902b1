"""Database access"""

from .lease_repository import LEASE_SORT_FIELDS, LeaseRepository
from .property_repository import SORTABLE_COLUMNS, PropertyRepository
from .rls import escape_like, scoped_connection

__all__ = [
    "LEASE_SORT_FIELDS",
    "LeaseRepository",
    "SORTABLE_COLUMNS",
    "PropertyRepository",
    "escape_like",
    "scoped_connection",
]
