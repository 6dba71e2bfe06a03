"""Request-scoped accessors for objects owned by the application."""

from __future__ import annotations

from fastapi import Request

from guide_api.services.chat_service import ChatService
from guide_api.utils.api_queue import ApiQueue


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


def get_llm_queue(request: Request) -> ApiQueue:
    return request.app.state.llm_queue
