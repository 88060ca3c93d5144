from enum import Enum


class UserRole(str, Enum):
    STUDENT = "STUDENT"


class OtpType(str, Enum):
    SIGNUP = "signup"
    MAGIC_LINK = "magiclink"
    EMAIL = "email"
    INVITE = "invite"
    RECOVERY = "recovery"
    EMAIL_CHANGE = "email_change"


class ResponseStatus(str, Enum):
    OK = "ok"
    HEALTHY = "healthy"
    CONFIRMATION_PENDING = "confirmation_pending"
    LINK_SENT = "link_sent"
