"""Ports: the boundaries between the retrieval core and the outside world."""

from .document_store_port import DocumentStorePort
from .embedding_port import EmbeddingPort
from .llm_port import LLMPort
from .text_extractor_port import TextExtractorPort

__all__ = ["DocumentStorePort", "EmbeddingPort", "LLMPort", "TextExtractorPort"]
