from orgchat.constants.chat_errors import CHAT_ERROR_MESSAGES, ChatErrorCode
from orgchat.constants.enums import OtpType, ResponseStatus, UserRole
from orgchat.constants.seed_data import (
    BOT_REPLY_PREFIX,
    BOT_USER_IDS,
    SEED_ORGANIZATIONS,
    SeedOrganization,
)

__all__ = [
    "CHAT_ERROR_MESSAGES",
    "ChatErrorCode",
    "OtpType",
    "ResponseStatus",
    "UserRole",
    "BOT_REPLY_PREFIX",
    "BOT_USER_IDS",
    "SEED_ORGANIZATIONS",
    "SeedOrganization",
]
