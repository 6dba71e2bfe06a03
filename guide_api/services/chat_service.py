"""Assistant chat service.

Builds prompts for the Mangystau tour guide assistant and pushes every
upstream call through a shared ``ApiQueue`` so the provider only ever sees
one request at a time from this process.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Iterable

from guide_api.adapters.llm.base import AbstractLLMClient
from guide_api.adapters.llm.factory import create_llm_client
from guide_api.core.config import settings
from guide_api.core.errors import LLMAppError, ValidationAppError
from guide_api.schemas.chat import ContextMessage
from guide_api.utils.api_queue import ApiQueue

logger = logging.getLogger(__name__)

GUIDE_CONTEXT = """
You are a tour guide chatbot for the Mangystau region of Kazakhstan.
Rules:
1. Answer only in Kazakh, Russian or English, matching the language the user writes in.
2. Use only facts from the application's database; do not invent anything.
3. Keep the tone youthful, simple and easy to follow.
4. Stay on tourism: sights, routes, culture and services of Mangystau.
5. If the information is not available, say so plainly instead of guessing.
6. Keep answers under 500 characters unless the user asks for more detail.
Conversation so far:
""".strip()

USER_LABEL = "User"
GUIDE_LABEL = "Guide"


def format_context(messages: Iterable[ContextMessage]) -> str:
    """Render conversation turns as ``"<speaker>: <text>"`` lines.

    Examples:
        >>> format_context([ContextMessage(text="Hi", sender="user")])
        'User: Hi'
    """
    return "\n".join(
        f"{USER_LABEL if msg.sender == 'user' else GUIDE_LABEL}: {msg.text}"
        for msg in messages
    )


def build_context_prompt(messages: Iterable[ContextMessage]) -> str:
    """Prefix the formatted conversation with the guide instructions."""
    return f"{GUIDE_CONTEXT}\n{format_context(messages)}"


class ChatService:
    """Send chat prompts to the upstream model one at a time.

    Attributes:
        queue: Serializer shared by every request that hits the same upstream.
        timeout_seconds: How long a caller waits for its queued call, or None.
    """

    def __init__(
        self,
        queue: ApiQueue,
        llm: AbstractLLMClient | None = None,
        *,
        llm_factory: Callable[[], AbstractLLMClient] = create_llm_client,
        timeout_seconds: float | None = None,
        max_message_chars: int | None = None,
    ) -> None:
        """Initialize the chat service.

        Args:
            queue: Request serializer for the upstream endpoint.
            llm: Ready LLM client. Built lazily with ``llm_factory`` when omitted,
                so a missing API key only fails chat requests, not startup.
            llm_factory: Callable producing the LLM client.
            timeout_seconds: Per-request wait limit (queue time included).
            max_message_chars: Maximum prompt length; defaults to settings.
        """
        self.queue = queue
        self._llm = llm
        self._llm_factory = llm_factory
        self.timeout_seconds = timeout_seconds
        self.max_message_chars = max_message_chars or settings.app.max_message_chars

    @property
    def llm(self) -> AbstractLLMClient:
        if self._llm is None:
            try:
                self._llm = self._llm_factory()
            except ValidationAppError as exc:
                logger.error(
                    "chat.llm_not_configured",
                    extra={"error_code": exc.code},
                )
                raise LLMAppError(
                    code=exc.code,
                    message="Server configuration error",
                    details={"hint": exc.message},
                ) from exc
        return self._llm

    def _validate(self, prompt: str) -> None:
        if not prompt or not prompt.strip():
            raise ValidationAppError(code="message_required", message="Message is required")
        if len(prompt) > self.max_message_chars:
            raise ValidationAppError(
                code="message_too_long",
                message=f"Message exceeds {self.max_message_chars} characters",
                details={
                    "max_value": self.max_message_chars,
                    "actual_value": len(prompt),
                },
            )

    async def send_message(self, message: str) -> str:
        """Send one message and wait for the reply.

        Args:
            message: Prompt text forwarded as-is.

        Returns:
            str: Upstream reply.

        Raises:
            ValidationAppError: If the message is blank or too long.
            LLMAppError: If the upstream call fails, times out, or the
                provider is not configured.
        """
        self._validate(message)
        llm = self.llm

        start = time.perf_counter()
        future = self.queue.submit(lambda: llm.generate_text(message))
        queued_ahead = self.queue.length - 1

        try:
            reply = await asyncio.wait_for(future, timeout=self.timeout_seconds)
        except asyncio.TimeoutError as exc:
            logger.warning(
                "chat.request_timeout",
                extra={
                    "timeout_s": self.timeout_seconds,
                    "queue": self.queue.name,
                },
            )
            raise LLMAppError(
                code="llm_timeout",
                message="The assistant did not answer in time",
                details={"timeout_seconds": self.timeout_seconds},
            ) from exc
        except Exception as exc:
            logger.error(
                "chat.request_failed",
                extra={
                    "error_type": type(exc).__name__,
                    "provider": llm.provider,
                },
            )
            raise LLMAppError(
                code="llm_request_failed",
                message=f"Failed to get response from the assistant: {exc}",
                details={"provider": llm.provider, "model": llm.model},
            ) from exc

        logger.info(
            "chat.request_completed",
            extra={
                "provider": llm.provider,
                "model": llm.model,
                "prompt_chars": len(message),
                "reply_chars": len(reply),
                "queued_ahead": max(queued_ahead, 0),
                "duration_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return reply

    async def send_message_with_context(self, messages: list[ContextMessage]) -> str:
        """Send a whole conversation, prefixed with the guide instructions."""
        if not messages:
            raise ValidationAppError(code="message_required", message="Message is required")
        return await self.send_message(build_context_prompt(messages))
