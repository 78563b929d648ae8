"""Gemini embedding adapter using the google-genai SDK."""

import logging
from typing import TYPE_CHECKING

from ....core.domain.exceptions import (
    EmbeddingError,
    EmbeddingRateLimitError,
    MissingAPIKeyError,
)
from ....core.ports.embedding_port import EmbeddingPort

if TYPE_CHECKING:
    from google import genai

logger = logging.getLogger(__name__)

DEFAULT_EMBEDDING_MODEL = "gemini-embedding-001"
# Per-request input limit of the embed_content endpoint
DEFAULT_BATCH_SIZE = 100


def is_rate_limit_error(exc: Exception) -> bool:
    """Whether a google-genai error means quota/rate limit exhaustion."""
    if getattr(exc, "code", None) == 429:
        return True
    message = str(exc).lower()
    return "quota" in message or "rate limit" in message or "resource_exhausted" in message


class GeminiEmbeddingAdapter(EmbeddingPort):
    """Embeds texts with a Gemini embedding model.

    The query and every passage go through one :meth:`embed` call. Inputs
    larger than the endpoint's batch limit are sent as consecutive pages and
    stitched back together in order. Failures are not retried.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_EMBEDDING_MODEL,
        task_type: str | None = "SEMANTIC_SIMILARITY",
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        """Initialize the adapter.

        Args:
            api_key: Google AI API key.
            model_name: Gemini embedding model.
            task_type: Embedding task type hint, or None for the model default.
            batch_size: Maximum texts per embed_content request.
        """
        self.api_key = api_key
        self.model_name = model_name
        self.task_type = task_type
        self.batch_size = max(1, batch_size)
        self._client: "genai.Client | None" = None

    def validate_configuration(self) -> None:
        if not self.api_key:
            raise MissingAPIKeyError(
                "GOOGLE_API_KEY missing",
                context={"service": "embedding", "model": self.model_name},
            )

    def _get_client(self) -> "genai.Client":
        """Lazy load the genai client."""
        if self._client is None:
            self.validate_configuration()
            from google import genai

            self._client = genai.Client(api_key=self.api_key)
            logger.info("Gemini embedding client initialized for model: %s", self.model_name)
        return self._client

    def _embed_batch(self, texts: list[str]) -> list[list[float]]:
        client = self._get_client()
        config = {"task_type": self.task_type} if self.task_type else None
        try:
            result = client.models.embed_content(
                model=self.model_name,
                contents=texts,
                config=config,
            )
        except Exception as e:
            error_cls = EmbeddingRateLimitError if is_rate_limit_error(e) else EmbeddingError
            raise error_cls(
                str(e),
                cause=e,
                context={"model": self.model_name, "batch_size": len(texts)},
            ) from e

        embeddings = getattr(result, "embeddings", None) or []
        return [list(embedding.values or []) for embedding in embeddings]

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed texts, preserving length and order.

        Raises:
            ValueError: If ``texts`` is empty.
            EmbeddingError: If the service call fails or returns the wrong
                number of vectors.
        """
        if not texts:
            raise ValueError("texts must not be empty")

        vectors: list[list[float]] = []
        for start in range(0, len(texts), self.batch_size):
            batch = texts[start : start + self.batch_size]
            batch_vectors = self._embed_batch(batch)
            if len(batch_vectors) != len(batch):
                raise EmbeddingError(
                    f"Embedding service returned {len(batch_vectors)} vectors for {len(batch)} inputs",
                    context={"model": self.model_name, "offset": start},
                )
            vectors.extend(batch_vectors)

        logger.debug("Embedded %d texts with %s", len(texts), self.model_name)
        return vectors
