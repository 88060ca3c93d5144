from datetime import datetime

from pydantic import BaseModel

from orgchat.schemas.organization import OrganizationResponse


class ChatMessageResponse(BaseModel):
    id: str
    content: str
    user_id: str
    organization_id: str
    created_at: datetime
    author_email: str | None = None
    is_bot: bool = False


class ChatViewResponse(BaseModel):
    organization: OrganizationResponse
    messages: list[ChatMessageResponse]
