"""Admin API - Module Exports"""

from .security import is_authorized, require_admin_token
from .router import router

__all__ = [
    "is_authorized",
    "require_admin_token",
    "router",
]
