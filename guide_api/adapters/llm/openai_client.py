"""OpenAI LLM client adapter."""

from typing import Any

from openai import AsyncOpenAI

from guide_api.adapters.llm.base import AbstractLLMClient

EMPTY_REPLY = "No response from OpenAI"


class OpenAIClient(AbstractLLMClient):
    """Client for OpenAI (or OpenAI-compatible) chat completions.

    Uses the official OpenAI Python SDK with async support.
    """

    provider = "openai"

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        timeout_seconds: float = 45.0,
        temperature: float | None = None,
    ) -> None:
        """Initialize OpenAI async client.

        Args:
            api_key: OpenAI API key for authentication.
            model: Model name (e.g., "gpt-4o-mini").
            base_url: Optional custom base URL for an OpenAI-compatible API.
            timeout_seconds: Timeout for requests in seconds.
            temperature: Default sampling temperature, provider default if None.
        """
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
        )
        self.model = model
        self.temperature = temperature

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Generate a reply using a single user message.

        Args:
            prompt: User prompt to send to the model.
            **kwargs: Provider options (temperature, max_tokens, top_p, etc.).

        Returns:
            str: Content of the first choice, or a placeholder if empty.

        Raises:
            RuntimeError: If the API call fails.
        """
        request_params: dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }

        temperature = kwargs.pop("temperature", self.temperature)
        if temperature is not None:
            request_params["temperature"] = temperature

        for param in ("max_tokens", "top_p", "seed"):
            if param in kwargs:
                request_params[param] = kwargs[param]

        try:
            response = await self.client.chat.completions.create(**request_params)
        except Exception as exc:
            raise RuntimeError(f"OpenAI API error: {str(exc)}") from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            return EMPTY_REPLY
        return content.strip()
