"""Completion service adapters."""

from .gemini_llm import GeminiLLMAdapter

__all__ = ["GeminiLLMAdapter"]
