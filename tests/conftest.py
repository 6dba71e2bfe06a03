"""Pytest configuration and fixtures shared across all test modules.

Environment defaults are set before any import that builds settings, so the
global ``settings`` object sees a configured, deterministic environment.
"""

import os

os.environ["APP_ENV"] = "testing"

os.environ.setdefault("LLM_PROVIDER", "gemini")
os.environ.setdefault("LLM_MODEL", "gemini-2.5-flash")
os.environ.setdefault("LLM_API_KEY", "test-key-123")
os.environ.setdefault("APP_CHAT_TIMEOUT_SECONDS", "5")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import Any

import pytest

from guide_api.adapters.llm.base import AbstractLLMClient


class FakeLLMClient(AbstractLLMClient):
    """In-memory LLM double that records prompts and returns canned replies."""

    provider = "fake"
    model = "fake-model"

    def __init__(self, reply: str = "Salem! Visit Bozzhyra.", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_llm() -> FakeLLMClient:
    return FakeLLMClient()
