"""Document store adapters."""

from .local_store import LocalDocumentStore

__all__ = ["LocalDocumentStore"]
