from pydantic import BaseModel, Field

from orgchat.schemas.organization import OrganizationResponse


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=6)
    organization_id: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=1)


class MagicLinkRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=320)


class AuthStatusResponse(BaseModel):
    status: str
    message: str | None = None
    organization: OrganizationResponse | None = None
