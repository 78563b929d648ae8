"""Filesystem document store for uploaded PDFs.

Files live flat in one uploads directory. A ``metadata.json`` file next to
them maps each stored file name to its project name, original file name and
upload time. Files copied into the directory by hand are still listed; they
fall back to their modification time and the default project name.
"""

import json
import logging
import re
import secrets
import threading
import time
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ....core.domain import StoredDocument
from ....core.domain.exceptions import (
    DocumentNotFoundError,
    DocumentStoreError,
    InvalidUploadError,
)
from ....core.ports.document_store_port import DocumentStorePort

logger = logging.getLogger(__name__)

METADATA_FILE = "metadata.json"
DEFAULT_PROJECT_NAME = "Untitled Project"
DEFAULT_FILENAME = "upload.pdf"
MAX_PROJECT_NAME_LENGTH = 120
DEFAULT_MAX_UPLOAD_BYTES = 25 * 1024 * 1024

_UNSAFE_FILENAME_CHARS = re.compile(r"[^\w.\- ]+")


def sanitize_filename(name: str) -> str:
    """Reduce an uploaded file name to a safe base name ending in ``.pdf``."""
    base = Path(name.replace("\\", "/")).name
    safe = _UNSAFE_FILENAME_CHARS.sub("_", base).strip()
    if not safe:
        safe = DEFAULT_FILENAME
    if not safe.lower().endswith(".pdf"):
        safe = f"{safe}.pdf"
    return safe


def sanitize_project_name(value: str | None) -> str:
    """Collapse whitespace and cap the length of a project name."""
    normalized = " ".join((value or "").split())
    return normalized[:MAX_PROJECT_NAME_LENGTH] if normalized else DEFAULT_PROJECT_NAME


def is_pdf_upload(filename: str, content_type: str | None) -> bool:
    return (content_type or "").lower() == "application/pdf" or filename.lower().endswith(".pdf")


def _sort_key(document: StoredDocument) -> datetime:
    try:
        parsed = datetime.fromisoformat(document.uploaded_at or "")
    except ValueError:
        return datetime.min.replace(tzinfo=UTC)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class LocalDocumentStore(DocumentStorePort):
    """Stores uploaded PDFs in a local directory."""

    def __init__(
        self,
        uploads_dir: str | Path,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        """Initialize the store.

        Args:
            uploads_dir: Directory holding the PDFs and ``metadata.json``.
            max_upload_bytes: Largest accepted upload.
        """
        self.uploads_dir = Path(uploads_dir)
        self.max_upload_bytes = max_upload_bytes
        self._metadata_lock = threading.Lock()

    @property
    def metadata_path(self) -> Path:
        return self.uploads_dir / METADATA_FILE

    def _ensure_dir(self) -> None:
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    def _read_metadata(self) -> dict[str, dict[str, Any]]:
        """Read metadata; a missing or corrupt file reads as empty."""
        try:
            parsed = json.loads(self.metadata_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable %s: %s", self.metadata_path, e)
            return {}
        return parsed if isinstance(parsed, dict) else {}

    def _write_metadata(self, metadata: dict[str, dict[str, Any]]) -> None:
        self.metadata_path.write_text(json.dumps(metadata, indent=2), encoding="utf-8")

    def path_for(self, document_id: str) -> Path:
        """Path of a stored document; ids cannot leave the uploads directory."""
        return self.uploads_dir / Path(document_id.replace("\\", "/")).name

    def has_document(self, document_id: str) -> bool:
        path = self.path_for(document_id)
        return path.is_file() and path.name.lower().endswith(".pdf")

    def list_documents(self) -> list[StoredDocument]:
        """List stored PDFs, newest upload first."""
        try:
            self._ensure_dir()
            metadata = self._read_metadata()
            paths = [
                path
                for path in self.uploads_dir.iterdir()
                if path.is_file() and path.name.lower().endswith(".pdf")
            ]
            documents = []
            for path in paths:
                meta = metadata.get(path.name, {})
                uploaded_at = meta.get("uploaded_at") or datetime.fromtimestamp(
                    path.stat().st_mtime, UTC
                ).isoformat()
                documents.append(
                    StoredDocument(
                        id=path.name,
                        display_name=meta.get("original_name") or path.name,
                        project_name=meta.get("project_name") or DEFAULT_PROJECT_NAME,
                        uploaded_at=uploaded_at,
                    )
                )
        except OSError as e:
            raise DocumentStoreError(
                str(e), cause=e, context={"uploads_dir": str(self.uploads_dir)}
            ) from e

        documents.sort(key=_sort_key, reverse=True)
        return documents

    def fetch_bytes(self, document_id: str) -> bytes:
        if not self.has_document(document_id):
            raise DocumentNotFoundError(
                f"Document not found: {document_id}", context={"document_id": document_id}
            )
        try:
            return self.path_for(document_id).read_bytes()
        except OSError as e:
            raise DocumentStoreError(str(e), cause=e, context={"document_id": document_id}) from e

    def validate_upload(
        self, filename: str, data: bytes, content_type: str | None = None
    ) -> None:
        """Raise ``InvalidUploadError`` if the upload would be rejected.

        Writes nothing, so a batch can be checked in full before any file of
        it is stored.
        """
        if not is_pdf_upload(filename, content_type):
            raise InvalidUploadError("Only PDF files are allowed", context={"filename": filename})
        if not data:
            raise InvalidUploadError("Uploaded file is empty", context={"filename": filename})
        if len(data) > self.max_upload_bytes:
            raise InvalidUploadError(
                "Upload payload is too large",
                context={"filename": filename, "limit_bytes": self.max_upload_bytes},
            )

    def save_upload(
        self,
        filename: str,
        data: bytes,
        project_name: str | None = None,
        content_type: str | None = None,
    ) -> StoredDocument:
        """Store one uploaded PDF under a unique name.

        Args:
            filename: Name the client sent.
            data: File contents.
            project_name: Project to file the upload under.
            content_type: MIME type the client sent.

        Returns:
            The stored document.

        Raises:
            InvalidUploadError: Not a PDF, empty, or over the size limit.
            DocumentStoreError: The file could not be written.
        """
        self.validate_upload(filename, data, content_type)

        original_name = sanitize_filename(filename)
        stored_name = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}-{original_name}"
        project = sanitize_project_name(project_name)
        uploaded_at = datetime.now(UTC).isoformat()

        try:
            self._ensure_dir()
            self.path_for(stored_name).write_bytes(data)
            with self._metadata_lock:
                metadata = self._read_metadata()
                metadata[stored_name] = {
                    "project_name": project,
                    "original_name": original_name,
                    "uploaded_at": uploaded_at,
                }
                self._write_metadata(metadata)
        except OSError as e:
            raise DocumentStoreError(str(e), cause=e, context={"filename": filename}) from e

        logger.info("Stored upload %s (%d bytes) in project %s", stored_name, len(data), project)
        return StoredDocument(
            id=stored_name,
            display_name=original_name,
            project_name=project,
            uploaded_at=uploaded_at,
        )
