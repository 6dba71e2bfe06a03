from abc import ABC, abstractmethod
from typing import Any


class AbstractLLMClient(ABC):
	"""Interface for clients that turn a text prompt into a text reply."""

	provider: str
	model: str

	@abstractmethod
	async def generate_text(self, prompt: str, **kwargs: Any) -> str:
		"""Send a prompt to the model and return its reply.

		Args:
			prompt: Full prompt text, including any guide instructions.
			**kwargs: Provider-specific options (e.g., temperature, max_tokens).

		Returns:
			str: Reply text. Providers substitute a placeholder when the
			upstream answer carries no text.

		Raises:
			RuntimeError: If the provider call fails.
		"""
		...
