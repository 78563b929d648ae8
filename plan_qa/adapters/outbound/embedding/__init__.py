"""Embedding service adapters."""

from .gemini_embedding import GeminiEmbeddingAdapter

__all__ = ["GeminiEmbeddingAdapter"]
