"""Google Gemini LLM client adapter."""

from typing import Any

from google import genai
from google.genai import types

from guide_api.adapters.llm.base import AbstractLLMClient

EMPTY_REPLY = "No response from Gemini"


class GeminiClient(AbstractLLMClient):
    """Client for Gemini ``generateContent`` using the google-genai async API."""

    provider = "gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout_seconds: float = 45.0,
        temperature: float | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Google AI Studio API key.
            model: Model name (e.g., "gemini-2.5-flash").
            timeout_seconds: Timeout for requests in seconds.
            temperature: Default sampling temperature, provider default if None.
        """
        self.client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
        )
        self.model = model
        self.temperature = temperature

    async def generate_text(self, prompt: str, **kwargs: Any) -> str:
        """Generate a reply for a single text prompt.

        Args:
            prompt: Prompt text sent as the only content part.
            **kwargs: ``temperature`` and ``max_tokens`` overrides.

        Returns:
            str: Text of the first candidate, or a placeholder if empty.

        Raises:
            RuntimeError: If the API call fails.
        """
        temperature = kwargs.pop("temperature", self.temperature)
        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=kwargs.get("max_tokens"),
        )

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=config,
            )
        except Exception as exc:
            raise RuntimeError(f"Gemini API error: {str(exc)}") from exc

        text = response.text
        if not text:
            return EMPTY_REPLY
        return text.strip()
