"""LLM Port Interface."""

from abc import ABC, abstractmethod


class LLMPort(ABC):
    """Abstract interface for completion services."""

    model_name: str = "unknown"

    @abstractmethod
    def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Send a system + user message pair and return the raw completion."""
        ...

    def validate_configuration(self) -> None:
        """Raise ``ConfigurationError`` if the service cannot be called."""
        return None
