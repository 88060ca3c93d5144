from uuid import uuid4

from pydantic import BaseModel, Field


class CreateMessageDTO(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    content: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)
    organization_id: str = Field(..., min_length=1)
