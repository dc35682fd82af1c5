"""
Admin Token Verification

SECURITY BOUNDARY - shared-secret check on configuration writes.
No store access. No logic.
"""

import hmac
from typing import Optional

from fastapi import HTTPException, Request, status

from proxy.headers import HEADER_ADMIN_TOKEN


def is_authorized(provided: Optional[str], expected: Optional[str]) -> bool:
    """
    Compare the presented token with the configured one.

    With no configured token every caller is authorized.
    """
    if not expected:
        return True
    if not provided:
        return False
    # Constant-time to prevent timing attacks
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


async def require_admin_token(request: Request) -> None:
    """
    FastAPI dependency guarding admin writes.

    Raises:
        HTTPException(401): missing or wrong x-admin-token
    """
    expected = request.app.state.config.admin_token
    if not is_authorized(request.headers.get(HEADER_ADMIN_TOKEN), expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
