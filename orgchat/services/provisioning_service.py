import logging

from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.constants.enums import UserRole
from orgchat.core.exceptions import (
    ConflictError,
    DatastoreError,
    NotFoundException,
    ServerErrorException,
)
from orgchat.dtos.user_dtos import CreateUserDTO
from orgchat.models.identity import Identity
from orgchat.models.organization import Organization
from orgchat.models.user import User
from orgchat.repositories.organization_repository import OrganizationRepository
from orgchat.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class NoOrganizationsAvailableError(ServerErrorException):
    def __init__(self):
        code = ChatErrorCode.NO_ORGANIZATIONS
        super().__init__(code.value, CHAT_ERROR_MESSAGES[code])


class ProfileInsertError(ServerErrorException):
    def __init__(self, reason: str):
        code = ChatErrorCode.USER_CREATION_FAILED
        super().__init__(code.value, CHAT_ERROR_MESSAGES[code])
        self.reason = reason


class ProfileNotFoundError(NotFoundException):
    def __init__(self):
        code = ChatErrorCode.USER_NOT_FOUND
        super().__init__(code.value, CHAT_ERROR_MESSAGES[code])


class ProvisioningService:
    """Guarantees that every authenticated identity has exactly one profile."""

    def __init__(
        self,
        user_repository: UserRepository,
        organization_repository: OrganizationRepository,
    ):
        self._user_repository = user_repository
        self._organization_repository = organization_repository

    async def ensure_profile(
        self,
        identity: Identity,
        preferred_organization_id: str | None = None,
    ) -> User:
        existing_user = await self._user_repository.find_by_id(identity.id)
        if existing_user:
            return existing_user

        organization = await self._resolve_organization(preferred_organization_id)
        logger.info(
            "Provisioning profile for %s in organization %s",
            identity.id,
            organization.id,
        )

        user_dto = CreateUserDTO(
            id=identity.id,
            email=identity.email or "",
            role=UserRole.STUDENT.value,
            organization_id=organization.id,
        )
        try:
            created_user = await self._user_repository.create(user_dto)
        except ConflictError:
            logger.info("Profile %s created concurrently, re-reading", identity.id)
            created_user = None
        except DatastoreError as e:
            logger.error("Profile insert failed for %s: %s", identity.id, e.reason)
            raise ProfileInsertError(e.reason) from e

        if created_user is None:
            created_user = await self._user_repository.find_by_id(identity.id)
        if created_user is None:
            logger.error("Profile %s missing after insert", identity.id)
            raise ProfileNotFoundError()
        return created_user

    async def _resolve_organization(
        self, preferred_organization_id: str | None
    ) -> Organization:
        if preferred_organization_id:
            organization = await self._organization_repository.find_by_id(
                preferred_organization_id
            )
            if organization:
                return organization
            logger.warning(
                "Selected organization %s does not exist, using default",
                preferred_organization_id,
            )

        organizations = await self._organization_repository.list_all()
        if not organizations:
            logger.error("Organization directory is empty")
            raise NoOrganizationsAvailableError()
        return min(organizations, key=lambda org: org.id)
