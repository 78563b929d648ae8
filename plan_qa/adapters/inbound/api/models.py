"""Pydantic models for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field


class QuestionRequest(BaseModel):
    """Request model for asking a question.

    Emptiness and length are checked by the pipeline so that a blank
    question is reported as a 400 with the same error body as other input
    errors.
    """

    model_config = ConfigDict(extra="forbid")

    question: str = Field(
        ...,
        description="Question about the uploaded documents",
        json_schema_extra={"example": "What is the garage size?"},
    )
    document_id: str | None = Field(
        None,
        description="Stored file name to restrict retrieval to; omit to use all documents",
    )


class SourceInfo(BaseModel):
    """A passage that was sent to the model as context."""

    passage_id: str = Field(..., description="Deterministic passage id")
    document_id: str = Field(..., description="Stored file name")
    title: str = Field(..., description="Display name of the source document")
    project_name: str | None = Field(None, description="Project the document belongs to")
    page: int = Field(..., ge=1, description="1-based page number")
    relevance_score: float = Field(..., ge=-1, le=1, description="Cosine similarity to the question")
    excerpt: str | None = Field(None, description="Start of the passage text")


class AnswerResponse(BaseModel):
    """Response model for an answered question."""

    answer: str = Field(..., description="The grounded answer")
    question: str = Field(..., description="The question as asked")
    outcome: str = Field(..., description="answered, no_documents or no_readable_text")
    sources: list[SourceInfo] = Field(
        default_factory=list,
        description="Passages used to generate the answer, most relevant first",
    )
    model_used: str | None = Field(None, description="Completion model, when one was called")


class UploadedFileInfo(BaseModel):
    """A stored PDF."""

    name: str = Field(..., description="Stored file name (document id)")
    display_name: str = Field(..., description="Original file name")
    project_name: str | None = Field(None, description="Project name")
    uploaded_at: str | None = Field(None, description="ISO-8601 upload time")
    url: str = Field(..., description="Where to download the file")


class UploadListResponse(BaseModel):
    """Stored PDFs, newest first."""

    files: list[UploadedFileInfo] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    document_store: str = Field(..., description="Document store status")
    configured: bool | None = Field(None, description="Whether API credentials are present")


class ErrorDetail(BaseModel):
    """Structured error detail information."""

    type: str = Field(..., description="Exception type name")
    code: str = Field(..., description="Error code (e.g., PQA_EMB_001)")
    kind: str | None = Field(None, description="invalid_input, unconfigured, upstream_failure, ...")
    message: str = Field(..., description="Human-readable error message")


class ErrorLocation(BaseModel):
    """Source location where error occurred."""

    model_config = ConfigDict(populate_by_name=True)

    class_name: str = Field(..., alias="class", description="Class name or <module>")
    method: str = Field(..., description="Method/function name")
    file: str = Field(..., description="Source file name")
    line: int = Field(..., description="Line number")
    timestamp: str | None = Field(None, description="When the error occurred")


class ErrorResponse(BaseModel):
    """Response model for structured errors.

    Example:
        {
            "error": {"type": "EmbeddingError", "code": "PQA_EMB_001",
                      "kind": "upstream_failure", "message": "quota exceeded"},
            "location": {"class": "GeminiEmbeddingAdapter", "method": "_embed_batch", ...},
            "context": {"stage": "embedding"},
            "cause": {"type": "ClientError", "message": "quota exceeded"}
        }
    """

    error: ErrorDetail = Field(..., description="Error details including type, code, and message")
    location: ErrorLocation | None = Field(None, description="Source location of the error")
    context: dict | None = Field(None, description="Additional debugging context")
    cause: dict | None = Field(None, description="Underlying exception that caused this error")
    stack_trace: list[str] | None = Field(None, description="Stack trace (debug mode only)")
