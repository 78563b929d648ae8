"""Document Store Port Interface."""

from abc import ABC, abstractmethod

from ..domain import StoredDocument


class DocumentStorePort(ABC):
    """Abstract interface for where uploaded PDFs live."""

    @abstractmethod
    def list_documents(self) -> list[StoredDocument]:
        """List stored documents. May be empty."""
        ...

    @abstractmethod
    def fetch_bytes(self, document_id: str) -> bytes:
        """Return the raw bytes of a stored document."""
        ...
