from fastapi import APIRouter

from orgchat.core.dependencies import ChatViewServiceDep, CurrentIdentityDep
from orgchat.schemas.chat import ChatMessageResponse, ChatViewResponse

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.get("", response_model=ChatViewResponse, summary="Chat view for the caller")
async def get_chat_view(
    identity: CurrentIdentityDep,
    chat_view_service: ChatViewServiceDep,
) -> ChatViewResponse:
    return await chat_view_service.get_chat_view(identity)


@router.get(
    "/messages",
    response_model=list[ChatMessageResponse],
    summary="Messages of the caller's organization",
)
async def list_chat_messages(
    identity: CurrentIdentityDep,
    chat_view_service: ChatViewServiceDep,
) -> list[ChatMessageResponse]:
    return await chat_view_service.get_messages(identity)
