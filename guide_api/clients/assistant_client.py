"""Async client for the assistant proxy.

Mirrors what the tourism front end does: every chat call goes through an
``ApiQueue`` so a page with several chat widgets still sends one request at a
time. Health checks bypass the queue.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx

from guide_api.schemas.chat import ContextMessage
from guide_api.services.chat_service import format_context
from guide_api.utils.api_queue import ApiQueue

logger = logging.getLogger(__name__)


class AssistantClientError(Exception):
    """Raised when the proxy answers a chat request with an error."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _error_message(response: httpx.Response) -> str:
    """Pick the most useful error text from a failed proxy response."""

    fallback = f"HTTP error! status: {response.status_code}"
    try:
        data: Any = response.json()
    except ValueError:
        return fallback

    if not isinstance(data, dict):
        return fallback

    error = data.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if error:
        return str(error)
    if data.get("message"):
        return str(data["message"])
    return fallback


class AssistantClient:
    """Client for ``/api/chat`` and ``/api/health`` on the assistant proxy.

    Attributes:
        queue: Serializer for chat calls; pass a shared one to serialize
            across several clients.
    """

    def __init__(
        self,
        base_url: str,
        *,
        queue: ApiQueue | None = None,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.queue = queue if queue is not None else ApiQueue(name="assistant-proxy")
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout,
        )

    async def __aenter__(self) -> "AssistantClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def _post_chat(self, message: str) -> str:
        response = await self._http.post("/api/chat", json={"message": message})
        if not response.is_success:
            raise AssistantClientError(_error_message(response), response.status_code)
        return response.json()["reply"]

    async def send_message(self, message: str) -> str:
        """Queue one message and return the assistant's reply.

        Raises:
            AssistantClientError: If the proxy returns a non-2xx status.
            httpx.HTTPError: On transport failures.
        """
        return await self.queue.submit(lambda: self._post_chat(message))

    async def send_message_with_context(self, messages: Iterable[ContextMessage]) -> str:
        """Send the conversation as a single ``User:``/``Guide:`` transcript."""
        return await self.send_message(format_context(messages))

    async def check_health(self) -> bool:
        try:
            response = await self._http.get("/api/health")
        except httpx.HTTPError as exc:
            logger.error(
                "assistant_client.health_check_failed",
                extra={"error_type": type(exc).__name__, "error_msg": str(exc)},
            )
            return False
        return response.is_success
