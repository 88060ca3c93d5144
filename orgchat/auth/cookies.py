from fastapi import Response

from orgchat.core.settings import settings
from orgchat.models.identity import AuthSession

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"


def set_session_cookies(response: Response, session: AuthSession) -> None:
    """Set HTTP-only cookies carrying the auth service session."""
    cookie_settings = {
        "httponly": True,
        "secure": settings.cookie_secure,
        "samesite": "lax",
        "path": "/",
    }
    response.set_cookie(
        key=ACCESS_TOKEN_COOKIE,
        value=session.access_token,
        max_age=session.expires_in or settings.access_token_cookie_max_age,
        **cookie_settings,
    )
    response.set_cookie(
        key=REFRESH_TOKEN_COOKIE,
        value=session.refresh_token,
        max_age=settings.refresh_token_cookie_max_age,
        **cookie_settings,
    )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(key=ACCESS_TOKEN_COOKIE, path="/")
    response.delete_cookie(key=REFRESH_TOKEN_COOKIE, path="/")
