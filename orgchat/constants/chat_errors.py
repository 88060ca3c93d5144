from enum import Enum


class ChatErrorCode(str, Enum):
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_CONTENT = "INVALID_CONTENT"
    INVALID_REQUEST = "INVALID_REQUEST"

    NO_ORGANIZATIONS = "NO_ORGANIZATIONS"
    ORGANIZATION_NOT_FOUND = "ORGANIZATION_NOT_FOUND"
    USER_CREATION_FAILED = "USER_CREATION_FAILED"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    MESSAGE_INSERT_FAILED = "MESSAGE_INSERT_FAILED"
    MESSAGE_FETCH_FAILED = "MESSAGE_FETCH_FAILED"

    AUTH_PROVIDER_ERROR = "AUTH_PROVIDER_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


CHAT_ERROR_MESSAGES: dict[ChatErrorCode, str] = {
    ChatErrorCode.UNAUTHORIZED: "Unauthorized",
    ChatErrorCode.INVALID_CONTENT: "Invalid content",
    ChatErrorCode.INVALID_REQUEST: "Invalid request",
    ChatErrorCode.NO_ORGANIZATIONS: "No organizations available",
    ChatErrorCode.ORGANIZATION_NOT_FOUND: "Organization not found",
    ChatErrorCode.USER_CREATION_FAILED: "Failed to create user",
    ChatErrorCode.USER_NOT_FOUND: "User not found",
    ChatErrorCode.MESSAGE_INSERT_FAILED: "Failed to insert message",
    ChatErrorCode.MESSAGE_FETCH_FAILED: "Failed to load messages",
    ChatErrorCode.AUTH_PROVIDER_ERROR: "Authentication service error",
    ChatErrorCode.INTERNAL_ERROR: "Internal Server Error",
}
