from orgchat.constants.seed_data import BOT_REPLY_PREFIX, BOT_USER_IDS
from orgchat.dtos.message_dtos import CreateMessageDTO
from orgchat.models.message import Message

_BOT_IDS = frozenset(BOT_USER_IDS.values())


def bot_user_id_for(organization_id: str) -> str | None:
    return BOT_USER_IDS.get(organization_id)


def is_bot_user(user_id: str) -> bool:
    return user_id in _BOT_IDS


def build_reply_content(content: str) -> str:
    return f"{BOT_REPLY_PREFIX}{content}"


def reply_to(message: Message) -> CreateMessageDTO | None:
    """Canned reply for a user message, or None when the organization has no bot."""
    bot_user_id = bot_user_id_for(message.organization_id)
    if bot_user_id is None or is_bot_user(message.user_id):
        return None
    return CreateMessageDTO(
        content=build_reply_content(message.content),
        user_id=bot_user_id,
        organization_id=message.organization_id,
    )
