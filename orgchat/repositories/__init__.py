from orgchat.repositories.message_repository import MessageRepository
from orgchat.repositories.organization_repository import OrganizationRepository
from orgchat.repositories.user_repository import UserRepository

__all__ = [
    "MessageRepository",
    "OrganizationRepository",
    "UserRepository",
]
