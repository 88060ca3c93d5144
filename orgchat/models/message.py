from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    content: str = Field(..., min_length=1)
    user_id: str
    organization_id: str
    created_at: datetime


class MessageWithAuthor(Message):
    author_email: str | None = None
