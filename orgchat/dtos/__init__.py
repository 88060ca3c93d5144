from orgchat.dtos.message_dtos import CreateMessageDTO
from orgchat.dtos.organization_dtos import CreateOrganizationDTO
from orgchat.dtos.token_dtos import AccessTokenPayload
from orgchat.dtos.user_dtos import CreateUserDTO

__all__ = [
    "AccessTokenPayload",
    "CreateMessageDTO",
    "CreateOrganizationDTO",
    "CreateUserDTO",
]
