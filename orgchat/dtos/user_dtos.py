from pydantic import BaseModel, Field

from orgchat.constants.enums import UserRole


class CreateUserDTO(BaseModel):
    id: str = Field(..., min_length=1)
    email: str
    role: str = UserRole.STUDENT.value
    organization_id: str = Field(..., min_length=1)
