# storefront/core/auth.py
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from storefront.core.config import get_settings

settings = get_settings()

# HTTP Bearer scheme:
# - auto_error=False => missing Authorization header will NOT raise immediately
#   so anonymous shoppers keep working (guest mode).
bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a shopper access token (JWT).

    Verification:
      - signature (JWT_ALG using JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified

    Raises:
        HTTPException(401): if token is invalid/expired, or no secret
        is configured to verify it with.
    """
    if not settings.JWT_SECRET:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token verification is not configured",
        )
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> int | None:
    """
    Resolve the optional user id attached to a cart.

    Flow:
      1. No Authorization header => guest => None.
      2. Decode JWT => extract integer 'sub'.

    The user id is informational only: carts are still keyed by the
    session cookie.
    """
    if credentials is None:
        return None

    payload = decode_access_token(credentials.credentials)
    sub = payload.get("sub")

    try:
        return int(sub)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )
