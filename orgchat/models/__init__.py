from orgchat.models.identity import AuthSession, Identity
from orgchat.models.message import Message, MessageWithAuthor
from orgchat.models.organization import Organization
from orgchat.models.user import User

__all__ = [
    "AuthSession",
    "Identity",
    "Message",
    "MessageWithAuthor",
    "Organization",
    "User",
]
