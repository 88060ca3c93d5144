import logging
from typing import Annotated
from urllib.parse import urlencode

from fastapi import APIRouter, Cookie, Depends, Query, Response
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials

from orgchat.auth.cookies import (
    ACCESS_TOKEN_COOKIE,
    clear_session_cookies,
    set_session_cookies,
)
from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.constants.enums import OtpType, ResponseStatus
from orgchat.core.dependencies import (
    AuthServiceDep,
    CurrentIdentityDep,
    http_bearer,
)
from orgchat.core.exceptions import AppException, ValidationException
from orgchat.core.settings import settings
from orgchat.schemas.auth import (
    AuthStatusResponse,
    LoginRequest,
    MagicLinkRequest,
    SignUpRequest,
)
from orgchat.schemas.common import StatusResponse, create_status_response
from orgchat.schemas.organization import OrganizationResponse
from orgchat.schemas.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])
organizations_router = APIRouter(tags=["Organizations"])


def _frontend_redirect(path: str, params: dict[str, str] | None = None) -> RedirectResponse:
    url = f"{settings.frontend_url.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params)}"
    return RedirectResponse(url=url)


def _parse_otp_type(value: str) -> OtpType:
    try:
        return OtpType(value)
    except ValueError:
        code = ChatErrorCode.INVALID_REQUEST
        raise ValidationException(code.value, CHAT_ERROR_MESSAGES[code]) from None


@organizations_router.get(
    "/organizations",
    response_model=list[OrganizationResponse],
    summary="Organizations available at signup",
)
async def list_organizations(auth_service: AuthServiceDep) -> list[OrganizationResponse]:
    return await auth_service.list_organizations()


@router.post("/signup", response_model=AuthStatusResponse, summary="Sign up")
async def sign_up(
    request: SignUpRequest,
    response: Response,
    auth_service: AuthServiceDep,
) -> AuthStatusResponse:
    result, session = await auth_service.sign_up(request)
    if session is not None:
        set_session_cookies(response, session)
    return result


@router.post("/login", response_model=AuthStatusResponse, summary="Sign in with password")
async def login(
    request: LoginRequest,
    response: Response,
    auth_service: AuthServiceDep,
) -> AuthStatusResponse:
    result = await auth_service.login(request)
    set_session_cookies(response, result.session)
    return AuthStatusResponse(status=ResponseStatus.OK.value)


@router.post(
    "/magic-link",
    response_model=AuthStatusResponse,
    summary="Send a one-time sign-in link",
)
async def send_magic_link(
    request: MagicLinkRequest,
    auth_service: AuthServiceDep,
) -> AuthStatusResponse:
    return await auth_service.send_magic_link(request.email)


@router.get(
    "/callback",
    summary="Email confirmation and sign-in link callback",
    description="Verifies the link, sets session cookies and redirects to the chat",
)
async def auth_callback(
    auth_service: AuthServiceDep,
    token_hash: str = Query(..., description="One-time token hash from the email link"),
    otp_type: str = Query(OtpType.EMAIL.value, alias="type"),
    org_state: str | None = Query(None, description="Signed organization selection"),
) -> RedirectResponse:
    try:
        result = await auth_service.complete_callback(
            token_hash, _parse_otp_type(otp_type), org_state
        )
    except AppException as e:
        logger.warning("Auth callback failed: code=%s message=%s", e.code, e.message)
        return _frontend_redirect("/login", {"error": e.code, "error_message": e.message})
    except Exception as e:
        logger.exception(f"Unexpected error during auth callback: {e}")
        code = ChatErrorCode.INTERNAL_ERROR
        return _frontend_redirect(
            "/login", {"error": code.value, "error_message": CHAT_ERROR_MESSAGES[code]}
        )

    response = _frontend_redirect("/chat")
    set_session_cookies(response, result.session)
    return response


@router.post("/logout", response_model=StatusResponse, summary="Sign out")
async def logout(
    response: Response,
    auth_service: AuthServiceDep,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer)],
    access_token_cookie: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
) -> StatusResponse:
    access_token = credentials.credentials if credentials else access_token_cookie
    await auth_service.logout(access_token)
    clear_session_cookies(response)
    return create_status_response()


@router.get("/me", response_model=UserResponse, summary="Current user")
async def get_current_user_profile(
    identity: CurrentIdentityDep,
    auth_service: AuthServiceDep,
) -> UserResponse:
    return await auth_service.get_profile(identity)
