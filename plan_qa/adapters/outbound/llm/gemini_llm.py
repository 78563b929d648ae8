"""Gemini completion adapter using the google-genai SDK."""

import logging
from typing import TYPE_CHECKING

from ....core.domain.exceptions import LLMError, LLMRateLimitError, MissingAPIKeyError
from ....core.domain.utils import clean_text
from ....core.ports.llm_port import LLMPort
from ..embedding.gemini_embedding import is_rate_limit_error

if TYPE_CHECKING:
    from google import genai

logger = logging.getLogger(__name__)


class GeminiLLMAdapter(LLMPort):
    """Client for Gemini chat completions.

    The system prompt is sent as the model's system instruction and the user
    prompt as the content. A response blocked by safety filters comes back
    as an empty string; the answer generator substitutes its fallback.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.2,
        max_output_tokens: int = 2048,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Google AI API key.
            model: Model to use.
            temperature: Sampling temperature (0.0-1.0).
            max_output_tokens: Maximum tokens to generate.
        """
        self.api_key = api_key
        self.model_name = model
        self.temperature = temperature
        self.max_output_tokens = max_output_tokens
        self._client: "genai.Client | None" = None

    def validate_configuration(self) -> None:
        if not self.api_key:
            raise MissingAPIKeyError(
                "GOOGLE_API_KEY missing",
                context={"service": "completion", "model": self.model_name},
            )

    def _get_client(self) -> "genai.Client":
        """Lazy load the genai client."""
        if self._client is None:
            self.validate_configuration()
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini client initialized for model: %s", self.model_name)
        return self._client

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        from google.genai.types import GenerateContentConfig

        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self.model_name,
                contents=clean_text(user_prompt),
                config=GenerateContentConfig(
                    system_instruction=system_prompt,
                    temperature=self.temperature,
                    max_output_tokens=self.max_output_tokens,
                ),
            )
        except Exception as e:
            error_cls = LLMRateLimitError if is_rate_limit_error(e) else LLMError
            raise error_cls(str(e), cause=e, context={"model": self.model_name}) from e

        if not response.candidates:
            logger.warning("Gemini returned no candidates (likely filtered)")
            return ""
        return clean_text(response.text or "")
