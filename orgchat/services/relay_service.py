import logging
from dataclasses import dataclass
from typing import Any

from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.core.exceptions import (
    DatastoreError,
    ServerErrorException,
    ValidationException,
)
from orgchat.dtos.message_dtos import CreateMessageDTO
from orgchat.models.identity import Identity
from orgchat.models.message import Message
from orgchat.repositories.message_repository import MessageRepository
from orgchat.services import bot_responder
from orgchat.services.provisioning_service import ProvisioningService

logger = logging.getLogger(__name__)


class InvalidContentError(ValidationException):
    def __init__(self):
        code = ChatErrorCode.INVALID_CONTENT
        super().__init__(code.value, CHAT_ERROR_MESSAGES[code])


class MessageInsertError(ServerErrorException):
    def __init__(self, reason: str):
        code = ChatErrorCode.MESSAGE_INSERT_FAILED
        super().__init__(code.value, CHAT_ERROR_MESSAGES[code])
        self.reason = reason


@dataclass
class RelayResult:
    message: Message
    reply: Message | None = None


def validate_content(payload: Any) -> str:
    content = payload.get("content") if isinstance(payload, dict) else None
    if not isinstance(content, str) or not content:
        raise InvalidContentError()
    return content


class RelayService:

    def __init__(
        self,
        provisioning_service: ProvisioningService,
        message_repository: MessageRepository,
    ):
        self._provisioning_service = provisioning_service
        self._message_repository = message_repository

    async def relay(self, identity: Identity, payload: Any) -> RelayResult:
        content = validate_content(payload)
        user = await self._provisioning_service.ensure_profile(identity)

        message_dto = CreateMessageDTO(
            content=content,
            user_id=user.id,
            organization_id=user.organization_id,
        )
        try:
            message = await self._message_repository.create(message_dto)
        except DatastoreError as e:
            logger.error("Message insert failed for %s: %s", user.id, e.reason)
            raise MessageInsertError(e.reason) from e

        logger.info(
            "Message %s accepted for organization %s",
            message.id,
            message.organization_id,
        )
        return RelayResult(message=message, reply=await self._post_reply(message))

    async def _post_reply(self, message: Message) -> Message | None:
        reply_dto = bot_responder.reply_to(message)
        if reply_dto is None:
            logger.debug("No bot configured for organization %s", message.organization_id)
            return None
        try:
            return await self._message_repository.create(reply_dto)
        except DatastoreError as e:
            # the user message is already committed; the reply is best effort
            logger.error("Bot reply to message %s failed: %s", message.id, e.reason)
            return None
