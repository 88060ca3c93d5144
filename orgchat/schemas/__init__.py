from orgchat.schemas.auth import (
    AuthStatusResponse,
    LoginRequest,
    MagicLinkRequest,
    SignUpRequest,
)
from orgchat.schemas.chat import ChatMessageResponse, ChatViewResponse
from orgchat.schemas.common import (
    ErrorResponse,
    StatusResponse,
    create_error_response,
    create_status_response,
)
from orgchat.schemas.organization import OrganizationResponse
from orgchat.schemas.user import UserResponse

__all__ = [
    "AuthStatusResponse",
    "LoginRequest",
    "MagicLinkRequest",
    "SignUpRequest",
    "ChatMessageResponse",
    "ChatViewResponse",
    "ErrorResponse",
    "StatusResponse",
    "create_error_response",
    "create_status_response",
    "OrganizationResponse",
    "UserResponse",
]
