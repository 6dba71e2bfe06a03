"""LLM adapter layer - abstracts over generative-text providers."""

from guide_api.adapters.llm.base import AbstractLLMClient
from guide_api.adapters.llm.factory import create_llm_client
from guide_api.adapters.llm.gemini_client import GeminiClient
from guide_api.adapters.llm.openai_client import OpenAIClient

__all__ = [
    "AbstractLLMClient",
    "GeminiClient",
    "OpenAIClient",
    "create_llm_client",
]
