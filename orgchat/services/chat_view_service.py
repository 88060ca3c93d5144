import logging

from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.core.exceptions import (
    DatastoreError,
    NotFoundException,
    ServerErrorException,
)
from orgchat.models.identity import Identity
from orgchat.models.message import MessageWithAuthor
from orgchat.repositories.message_repository import MessageRepository
from orgchat.repositories.organization_repository import OrganizationRepository
from orgchat.schemas.chat import (
    ChatMessageResponse,
    ChatViewResponse,
)
from orgchat.schemas.organization import OrganizationResponse
from orgchat.services import bot_responder
from orgchat.services.provisioning_service import ProvisioningService

logger = logging.getLogger(__name__)


class ChatViewService:

    def __init__(
        self,
        provisioning_service: ProvisioningService,
        organization_repository: OrganizationRepository,
        message_repository: MessageRepository,
    ):
        self._provisioning_service = provisioning_service
        self._organization_repository = organization_repository
        self._message_repository = message_repository

    async def list_messages(self, organization_id: str) -> list[MessageWithAuthor]:
        try:
            messages = await self._message_repository.list_by_organization(
                organization_id
            )
        except DatastoreError as e:
            logger.error(
                "Loading messages for %s failed: %s", organization_id, e.reason
            )
            code = ChatErrorCode.MESSAGE_FETCH_FAILED
            raise ServerErrorException(code.value, CHAT_ERROR_MESSAGES[code]) from e

        return [
            message.model_copy(update={"author_email": None})
            if bot_responder.is_bot_user(message.user_id)
            else message
            for message in messages
            if message.organization_id == organization_id
        ]

    async def get_chat_view(self, identity: Identity) -> ChatViewResponse:
        user = await self._provisioning_service.ensure_profile(identity)

        organization = await self._organization_repository.find_by_id(
            user.organization_id
        )
        if organization is None:
            code = ChatErrorCode.ORGANIZATION_NOT_FOUND
            raise NotFoundException(code.value, CHAT_ERROR_MESSAGES[code])

        messages = await self.list_messages(organization.id)
        return ChatViewResponse(
            organization=OrganizationResponse(id=organization.id, name=organization.name),
            messages=[to_message_response(message) for message in messages],
        )

    async def get_messages(self, identity: Identity) -> list[ChatMessageResponse]:
        user = await self._provisioning_service.ensure_profile(identity)
        messages = await self.list_messages(user.organization_id)
        return [to_message_response(message) for message in messages]


def to_message_response(message: MessageWithAuthor) -> ChatMessageResponse:
    return ChatMessageResponse(
        id=message.id,
        content=message.content,
        user_id=message.user_id,
        organization_id=message.organization_id,
        created_at=message.created_at,
        author_email=message.author_email,
        is_bot=bot_responder.is_bot_user(message.user_id),
    )
