from pydantic import BaseModel

from orgchat.schemas.organization import OrganizationResponse


class UserResponse(BaseModel):
    id: str
    email: str | None
    role: str
    organization: OrganizationResponse
