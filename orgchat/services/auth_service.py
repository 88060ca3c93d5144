import logging
from dataclasses import dataclass
from urllib.parse import urlencode

from orgchat.auth.client import AuthProviderError, SupabaseAuthClient
from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.constants.enums import OtpType, ResponseStatus
from orgchat.core.exceptions import NotFoundException, ValidationException
from orgchat.core.settings import settings
from orgchat.models.identity import AuthSession, Identity
from orgchat.models.user import User
from orgchat.repositories.organization_repository import OrganizationRepository
from orgchat.schemas.auth import (
    AuthStatusResponse,
    LoginRequest,
    SignUpRequest,
)
from orgchat.schemas.organization import OrganizationResponse
from orgchat.schemas.user import UserResponse
from orgchat.services.provisioning_service import ProvisioningService
from orgchat.utils.org_state import create_org_state, organization_from_state

logger = logging.getLogger(__name__)


@dataclass
class SignedInResult:
    session: AuthSession
    user: User


class AuthService:

    def __init__(
        self,
        auth_client: SupabaseAuthClient,
        organization_repository: OrganizationRepository,
        provisioning_service: ProvisioningService,
    ):
        self._auth_client = auth_client
        self._organization_repository = organization_repository
        self._provisioning_service = provisioning_service

    async def list_organizations(self) -> list[OrganizationResponse]:
        organizations = await self._organization_repository.list_all()
        return [OrganizationResponse(id=org.id, name=org.name) for org in organizations]

    async def sign_up(
        self, request: SignUpRequest
    ) -> tuple[AuthStatusResponse, AuthSession | None]:
        organization = await self._organization_repository.find_by_id(
            request.organization_id
        )
        if organization is None:
            logger.warning("Signup with unknown organization: %s", request.organization_id)
            code = ChatErrorCode.ORGANIZATION_NOT_FOUND
            raise ValidationException(code.value, CHAT_ERROR_MESSAGES[code])

        org_state = create_org_state(organization.id, request.email)
        redirect_to = f"{settings.auth_callback_url}?{urlencode({'org_state': org_state})}"
        identity, session = await self._auth_client.sign_up(
            request.email, request.password, redirect_to=redirect_to
        )
        organization_response = OrganizationResponse(
            id=organization.id, name=organization.name
        )

        if session is None:
            logger.info("Signup pending email confirmation: %s", identity.id)
            return (
                AuthStatusResponse(
                    status=ResponseStatus.CONFIRMATION_PENDING.value,
                    message="Check your email to confirm your account.",
                    organization=organization_response,
                ),
                None,
            )

        await self._provisioning_service.ensure_profile(identity, organization.id)
        logger.info("Signup completed without confirmation: %s", identity.id)
        return (
            AuthStatusResponse(
                status=ResponseStatus.OK.value,
                organization=organization_response,
            ),
            session,
        )

    async def login(self, request: LoginRequest) -> SignedInResult:
        session = await self._auth_client.sign_in_with_password(
            request.email, request.password
        )
        identity = await self._session_identity(session)
        user = await self._provisioning_service.ensure_profile(identity)
        logger.info("User signed in: %s", identity.id)
        return SignedInResult(session=session, user=user)

    async def send_magic_link(self, email: str) -> AuthStatusResponse:
        await self._auth_client.sign_in_with_otp(
            email, redirect_to=settings.auth_callback_url
        )
        return AuthStatusResponse(
            status=ResponseStatus.LINK_SENT.value,
            message="Check your email for a sign-in link.",
        )

    async def complete_callback(
        self,
        token_hash: str,
        otp_type: OtpType,
        org_state: str | None = None,
    ) -> SignedInResult:
        session = await self._auth_client.verify_otp(token_hash, otp_type.value)
        identity = await self._session_identity(session)

        organization_id = organization_from_state(org_state, identity.email)
        if org_state and organization_id is None:
            logger.warning("Ignoring invalid organization state for %s", identity.id)

        user = await self._provisioning_service.ensure_profile(identity, organization_id)
        logger.info("Callback completed for %s", identity.id)
        return SignedInResult(session=session, user=user)

    async def logout(self, access_token: str | None) -> None:
        if not access_token:
            return
        try:
            await self._auth_client.sign_out(access_token)
        except AuthProviderError as e:
            logger.warning("Remote sign-out failed, clearing local session: %s", e.message)

    async def get_profile(self, identity: Identity) -> UserResponse:
        user = await self._provisioning_service.ensure_profile(identity)
        organization = await self._organization_repository.find_by_id(
            user.organization_id
        )
        if organization is None:
            code = ChatErrorCode.ORGANIZATION_NOT_FOUND
            raise NotFoundException(code.value, CHAT_ERROR_MESSAGES[code])
        return UserResponse(
            id=user.id,
            email=user.email or identity.email,
            role=user.role,
            organization=OrganizationResponse(id=organization.id, name=organization.name),
        )

    async def _session_identity(self, session: AuthSession) -> Identity:
        if session.user is not None:
            return session.user
        identity = await self._auth_client.get_user(session.access_token)
        if identity is None:
            raise AuthProviderError(401, "Session user could not be resolved")
        return identity
