import logging
from collections.abc import AsyncGenerator
from typing import Annotated

import asyncpg
from fastapi import Cookie, Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from orgchat.auth.client import AuthProviderError, SupabaseAuthClient, auth_client
from orgchat.auth.cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    set_session_cookies,
)
from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.core.exceptions import AuthenticationException
from orgchat.core.security import token_service
from orgchat.database import db_connection
from orgchat.models.identity import AuthSession, Identity
from orgchat.repositories.message_repository import MessageRepository
from orgchat.repositories.organization_repository import OrganizationRepository
from orgchat.repositories.user_repository import UserRepository
from orgchat.services.auth_service import AuthService
from orgchat.services.chat_view_service import ChatViewService
from orgchat.services.provisioning_service import ProvisioningService
from orgchat.services.relay_service import RelayService

logger = logging.getLogger(__name__)

http_bearer = HTTPBearer(auto_error=False)


async def get_db_session() -> AsyncGenerator[asyncpg.Connection, None]:
    async with db_connection.get_connection() as conn:
        yield conn


def get_auth_client() -> SupabaseAuthClient:
    return auth_client


def get_user_repository(
    conn: asyncpg.Connection = Depends(get_db_session),
) -> UserRepository:
    return UserRepository(conn)


def get_organization_repository(
    conn: asyncpg.Connection = Depends(get_db_session),
) -> OrganizationRepository:
    return OrganizationRepository(conn)


def get_message_repository(
    conn: asyncpg.Connection = Depends(get_db_session),
) -> MessageRepository:
    return MessageRepository(conn)


def get_provisioning_service(
    user_repository: UserRepository = Depends(get_user_repository),
    organization_repository: OrganizationRepository = Depends(
        get_organization_repository
    ),
) -> ProvisioningService:
    return ProvisioningService(
        user_repository=user_repository,
        organization_repository=organization_repository,
    )


def get_relay_service(
    provisioning_service: ProvisioningService = Depends(get_provisioning_service),
    message_repository: MessageRepository = Depends(get_message_repository),
) -> RelayService:
    return RelayService(
        provisioning_service=provisioning_service,
        message_repository=message_repository,
    )


def get_chat_view_service(
    provisioning_service: ProvisioningService = Depends(get_provisioning_service),
    organization_repository: OrganizationRepository = Depends(
        get_organization_repository
    ),
    message_repository: MessageRepository = Depends(get_message_repository),
) -> ChatViewService:
    return ChatViewService(
        provisioning_service=provisioning_service,
        organization_repository=organization_repository,
        message_repository=message_repository,
    )


def get_auth_service(
    client: SupabaseAuthClient = Depends(get_auth_client),
    organization_repository: OrganizationRepository = Depends(
        get_organization_repository
    ),
    provisioning_service: ProvisioningService = Depends(get_provisioning_service),
) -> AuthService:
    return AuthService(
        auth_client=client,
        organization_repository=organization_repository,
        provisioning_service=provisioning_service,
    )


def _identity_from_token(token: str | None) -> Identity | None:
    if not token:
        return None
    payload = token_service.verify_access_token(token)
    if payload is None:
        return None
    return Identity(id=payload.sub, email=payload.email)


async def _refresh_identity(
    client: SupabaseAuthClient,
    refresh_token: str,
    request: Request,
    response: Response,
) -> Identity | None:
    try:
        session: AuthSession = await client.refresh_session(refresh_token)
    except AuthProviderError as e:
        logger.info("Session refresh rejected: %s", e.message)
        return None
    # exception handlers re-attach this session to error responses
    request.state.refreshed_session = session
    set_session_cookies(response, session)
    return session.user or _identity_from_token(session.access_token)


async def get_optional_identity(
    request: Request,
    response: Response,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(http_bearer)],
    client: SupabaseAuthClient = Depends(get_auth_client),
    access_token_cookie: Annotated[str | None, Cookie(alias=ACCESS_TOKEN_COOKIE)] = None,
    refresh_token_cookie: Annotated[
        str | None, Cookie(alias=REFRESH_TOKEN_COOKIE)
    ] = None,
) -> Identity | None:
    # bearer sessions are persisted by the caller, cookie sessions are refreshed here
    if credentials is not None:
        return _identity_from_token(credentials.credentials)

    identity = _identity_from_token(access_token_cookie)
    if identity is None and refresh_token_cookie:
        identity = await _refresh_identity(
            client, refresh_token_cookie, request, response
        )
    return identity


async def get_current_identity(
    identity: Annotated[Identity | None, Depends(get_optional_identity)],
) -> Identity:
    if identity is None:
        code = ChatErrorCode.UNAUTHORIZED
        raise AuthenticationException(code.value, CHAT_ERROR_MESSAGES[code])
    return identity


CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]
RelayServiceDep = Annotated[RelayService, Depends(get_relay_service)]
ChatViewServiceDep = Annotated[ChatViewService, Depends(get_chat_view_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
