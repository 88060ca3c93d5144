from pydantic import BaseModel, ConfigDict

from orgchat.constants.enums import UserRole


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str = UserRole.STUDENT.value
    organization_id: str
