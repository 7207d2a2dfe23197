# app/middlewares/browser_session.py
import secrets

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.platform.config import settings


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class BrowserSessionMiddleware(BaseHTTPMiddleware):
    """
    Give every browser an opaque id that keys its server-side state.

    The id itself carries nothing; the auth token and the flow snapshot stay
    in the key-value store.
    """

    def __init__(self, app, cookie_name: str = None):
        super().__init__(app)
        self.cookie_name = cookie_name or settings.SESSION_COOKIE_NAME

    async def dispatch(self, request: Request, call_next):
        session_id = request.cookies.get(self.cookie_name)
        is_new = not session_id
        if is_new:
            session_id = new_session_id()

        request.state.session_id = session_id
        response = await call_next(request)

        if is_new:
            response.set_cookie(
                self.cookie_name,
                session_id,
                max_age=settings.SESSION_TTL_SECONDS,
                httponly=True,
                secure=settings.SESSION_COOKIE_SECURE,
                samesite="lax",
            )
        return response
