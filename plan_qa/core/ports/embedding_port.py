"""Embedding Port Interface."""

from abc import ABC, abstractmethod


class EmbeddingPort(ABC):
    """Abstract interface for embedding services."""

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts.

        The result is length- and order-preserving: ``result[i]`` is the
        vector for ``texts[i]``.
        """
        ...

    def validate_configuration(self) -> None:
        """Raise ``ConfigurationError`` if the service cannot be called."""
        return None
