"""Google Gemini adapter implementing the LLM port (google-genai SDK)."""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from google import genai

from ....core.domain.exceptions import LLMProviderError
from ....core.ports.llm_port import LLMPort

logger = logging.getLogger(__name__)


class GeminiAdapter(LLMPort):
    """Single-shot text generation with a fixed Gemini model.

    Errors are raised as LLMProviderError; retrying is left to the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        temperature: float | None = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Google AI API key.
            model: Model identifier.
            temperature: Optional sampling temperature; provider default when None.
        """
        self.api_key = api_key
        self.model_name = model
        self.temperature = temperature
        self._client: "genai.Client | None" = None

    def _get_client(self) -> "genai.Client":
        """Lazy load the Gemini client."""
        if self._client is None:
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini client initialized for model: %s", self.model_name)
        return self._client

    def generate(self, prompt: str) -> str:
        """Generate a completion for ``prompt``.

        Returns:
            The model's response text, unmodified.

        Raises:
            LLMProviderError: If the call fails or no text comes back.
        """
        from google.genai.types import GenerateContentConfig

        config = None
        if self.temperature is not None:
            config = GenerateContentConfig(temperature=self.temperature)

        try:
            response = self._get_client().models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=config,
            )
        except Exception as e:
            raise LLMProviderError(
                f"Gemini request failed: {e}",
                cause=e,
                context={"model": self.model_name},
            ) from e

        text = response.text
        if not text:
            raise LLMProviderError(
                "Gemini returned an empty response",
                context={"model": self.model_name, "candidates": len(response.candidates or [])},
            )
        return text
