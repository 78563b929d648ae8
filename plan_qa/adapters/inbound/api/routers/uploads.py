"""Upload, list and download endpoints for stored PDFs."""

import logging

from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import FileResponse

from .....composition.container import get_document_store
from .....core.domain import StoredDocument
from .....core.domain.exceptions import DocumentNotFoundError, InvalidUploadError
from ..models import ErrorResponse, UploadedFileInfo, UploadListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["uploads"])


def to_file_info(document: StoredDocument) -> UploadedFileInfo:
    return UploadedFileInfo(
        name=document.id,
        display_name=document.display_name,
        project_name=document.project_name,
        uploaded_at=document.uploaded_at,
        url=f"/api/v1/uploads/{document.id}",
    )


@router.post(
    "/uploads",
    response_model=UploadListResponse,
    responses={400: {"model": ErrorResponse, "description": "Rejected upload"}},
)
def upload_files(
    files: list[UploadFile] = File(..., description="One or more PDF files"),
    project_name: str | None = Form(None, description="Project to file the uploads under"),
) -> UploadListResponse:
    """Store uploaded PDFs under unique names.

    The whole batch is rejected, and nothing is written, if any file fails
    validation.
    """
    if not files:
        raise InvalidUploadError("No files were uploaded")

    store = get_document_store()
    batch = [(upload.filename or "", upload.file.read(), upload.content_type) for upload in files]
    for filename, data, content_type in batch:
        store.validate_upload(filename, data, content_type)

    saved = [
        store.save_upload(filename, data, project_name=project_name, content_type=content_type)
        for filename, data, content_type in batch
    ]

    logger.info("Stored %d uploads", len(saved))
    saved.sort(key=lambda doc: doc.uploaded_at or "", reverse=True)
    return UploadListResponse(files=[to_file_info(doc) for doc in saved])


@router.get("/uploads", response_model=UploadListResponse)
def list_uploads() -> UploadListResponse:
    """List stored PDFs, newest first."""
    store = get_document_store()
    return UploadListResponse(files=[to_file_info(doc) for doc in store.list_documents()])


@router.get(
    "/uploads/{name}",
    response_class=FileResponse,
    responses={404: {"model": ErrorResponse, "description": "File not found"}},
)
def download_upload(name: str) -> FileResponse:
    """Serve a stored PDF inline."""
    store = get_document_store()
    if not store.has_document(name):
        raise DocumentNotFoundError(f"File not found: {name}", context={"document_id": name})

    path = store.path_for(name)
    return FileResponse(
        path,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{path.name}"'},
    )
