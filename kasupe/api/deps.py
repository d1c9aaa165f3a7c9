"""Shared API dependencies: single import point for all routers.

Re-exports database session and authentication dependencies so that router
modules can import everything they need from one place::

    from kasupe.api.deps import get_db, get_current_admin
"""

from kasupe.auth.dependencies import (
    get_current_admin,
    get_current_customer,
    get_optional_customer,
)
from kasupe.database import get_db

__all__ = [
    "get_db",
    "get_current_admin",
    "get_current_customer",
    "get_optional_customer",
]
