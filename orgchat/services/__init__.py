from orgchat.services.auth_service import AuthService
from orgchat.services.chat_view_service import ChatViewService
from orgchat.services.provisioning_service import ProvisioningService
from orgchat.services.relay_service import RelayService

__all__ = [
    "AuthService",
    "ChatViewService",
    "ProvisioningService",
    "RelayService",
]
