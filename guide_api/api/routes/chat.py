from typing import Annotated

from fastapi import APIRouter, Depends

from guide_api.api.routes.dependencies import get_chat_service
from guide_api.schemas.chat import ChatContextRequest, ChatRequest, ChatResponse
from guide_api.services.chat_service import ChatService

router = APIRouter(tags=["Chat"])

ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]


@router.post("/chat", response_model=ChatResponse)
async def chat(payload: ChatRequest, service: ChatServiceDep) -> ChatResponse:
    """Forward a single message to the assistant.

    Concurrent requests are answered in arrival order; each waits for the
    upstream calls queued ahead of it.

    Returns:
        ChatResponse: The assistant's reply.
    """
    reply = await service.send_message(payload.message)
    return ChatResponse(reply=reply)


@router.post("/chat/context", response_model=ChatResponse)
async def chat_with_context(
    payload: ChatContextRequest, service: ChatServiceDep
) -> ChatResponse:
    """Send the conversation so far, framed by the tour guide instructions."""
    reply = await service.send_message_with_context(payload.messages)
    return ChatResponse(reply=reply)
