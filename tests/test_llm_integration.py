"""Integration tests for LLM adapter layer."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from guide_api.adapters.llm import GeminiClient, OpenAIClient, create_llm_client
from guide_api.core.config import LLMSettings
from guide_api.core.errors import ValidationAppError


def _llm_settings(**overrides) -> LLMSettings:
    values = {
        "provider": "gemini",
        "model": "gemini-2.5-flash",
        "api_key": "test-key",
        "base_url": None,
        "timeout_seconds": 30.0,
    }
    values.update(overrides)
    return LLMSettings(**values)


class TestGeminiClientIntegration:
    """Test Gemini client with the SDK call mocked out."""

    @pytest.mark.asyncio
    async def test_generate_text_success(self) -> None:
        client = GeminiClient(api_key="test-key-123")

        with patch.object(
            client.client.aio.models,
            "generate_content",
            new_callable=AsyncMock,
            return_value=MagicMock(text="  Visit the Valley of Balls.  "),
        ) as mock_generate:
            reply = await client.generate_text("What to see near Shetpe?")

        assert reply == "Visit the Valley of Balls."
        call_kwargs = mock_generate.call_args.kwargs
        assert call_kwargs["model"] == "gemini-2.5-flash"
        assert call_kwargs["contents"] == "What to see near Shetpe?"

    @pytest.mark.asyncio
    async def test_empty_text_returns_placeholder(self) -> None:
        client = GeminiClient(api_key="test-key-123")

        with patch.object(
            client.client.aio.models,
            "generate_content",
            new_callable=AsyncMock,
            return_value=MagicMock(text=None),
        ):
            reply = await client.generate_text("Hello")

        assert reply == "No response from Gemini"

    @pytest.mark.asyncio
    async def test_api_error_raises_runtime_error(self) -> None:
        client = GeminiClient(api_key="test-key-123")

        with patch.object(
            client.client.aio.models,
            "generate_content",
            new_callable=AsyncMock,
            side_effect=ValueError("API key not valid"),
        ):
            with pytest.raises(RuntimeError, match="Gemini API error: API key not valid"):
                await client.generate_text("Hello")


class TestOpenAIClientIntegration:
    """Test OpenAI client integration with mocked API calls."""

    @pytest.mark.asyncio
    async def test_generate_text_success(self) -> None:
        mock_response = MagicMock()
        mock_response.choices = [
            MagicMock(message=MagicMock(content="Try the Beket-Ata pilgrimage."))
        ]
        client = OpenAIClient(api_key="test-key-123", model="gpt-4o-mini")

        with patch.object(
            client.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=mock_response,
        ) as mock_create:
            reply = await client.generate_text("Spiritual sites?", temperature=0.3)

        assert reply == "Try the Beket-Ata pilgrimage."
        call_kwargs = mock_create.call_args.kwargs
        assert call_kwargs["model"] == "gpt-4o-mini"
        assert call_kwargs["temperature"] == 0.3
        assert call_kwargs["messages"] == [{"role": "user", "content": "Spiritual sites?"}]

    @pytest.mark.asyncio
    async def test_temperature_omitted_when_unset(self) -> None:
        mock_response = MagicMock()
        mock_response.choices = [MagicMock(message=MagicMock(content="ok"))]
        client = OpenAIClient(api_key="test-key", model="gpt-4o-mini")

        with patch.object(
            client.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            return_value=mock_response,
        ) as mock_create:
            await client.generate_text("Test")

        assert "temperature" not in mock_create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_api_error_raises_runtime_error(self) -> None:
        client = OpenAIClient(api_key="test-key", model="gpt-4o-mini")

        with patch.object(
            client.client.chat.completions,
            "create",
            new_callable=AsyncMock,
            side_effect=ConnectionError("network down"),
        ):
            with pytest.raises(RuntimeError, match="OpenAI API error"):
                await client.generate_text("Test")


class TestLLMFactory:
    """Test LLM client factory pattern."""

    def test_creates_gemini_client(self) -> None:
        client = create_llm_client(_llm_settings())

        assert isinstance(client, GeminiClient)
        assert client.model == "gemini-2.5-flash"

    def test_creates_openai_client(self) -> None:
        client = create_llm_client(_llm_settings(provider="OpenAI", model="gpt-4o-mini"))

        assert isinstance(client, OpenAIClient)
        assert client.model == "gpt-4o-mini"

    def test_missing_api_key_raises_error(self) -> None:
        with pytest.raises(ValidationAppError, match="requires LLM_API_KEY") as exc:
            create_llm_client(_llm_settings(api_key=None))
        assert exc.value.code == "llm_missing_api_key"

    def test_unknown_provider_raises_error(self) -> None:
        with pytest.raises(ValidationAppError, match="Unknown LLM provider") as exc:
            create_llm_client(_llm_settings(provider="unknown-provider"))
        assert exc.value.code == "llm_unknown_provider"
