# storefront/core/session.py
import uuid

from fastapi import Request, Response

from storefront.core.config import get_settings

settings = get_settings()


def new_session_id() -> str:
    return f"session_{uuid.uuid4().hex}"


def get_cart_session_id(request: Request, response: Response) -> str:
    """
    Resolve the opaque cart session token for this shopper.

    The token only correlates an anonymous browser with its Cart row.
    It is generated on first cart access and handed back as a cookie;
    it carries no authentication semantics.
    """
    session_id = request.cookies.get(settings.CART_SESSION_COOKIE)
    if not session_id:
        session_id = new_session_id()
        response.set_cookie(
            key=settings.CART_SESSION_COOKIE,
            value=session_id,
            max_age=settings.CART_SESSION_MAX_AGE,
            httponly=True,
            samesite="lax",
        )
    return session_id
