"""Upstream failure exceptions for plan-qa.

Raised when a collaborator outside the process (document store, text
extractor, embedding service, completion service) fails. The message of the
originating error is kept verbatim so operators can diagnose the upstream
problem from the response alone.
"""

from typing import Any

from .base import ErrorKind, PlanQAError


class UpstreamError(PlanQAError):
    """Base error for failed external calls.

    Attributes:
        stage: Pipeline stage that was running when the call failed, or
            ``None`` when raised outside the pipeline.
    """

    error_code = "PQA_UPS_001"
    kind = ErrorKind.UPSTREAM_FAILURE
    http_status = 500

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(message, cause=cause, context=context)
        self.stage = stage
        if stage:
            self.extra_context.setdefault("stage", stage)

    def at_stage(self, stage: str) -> "UpstreamError":
        """Record the pipeline stage if not already set and return self."""
        if self.stage is None:
            self.stage = stage
            self.extra_context.setdefault("stage", stage)
        return self


class DocumentStoreError(UpstreamError):
    """Listing or fetching stored documents failed."""

    error_code = "PQA_UPS_002"


class PDFExtractionError(UpstreamError):
    """Failed to extract text from a PDF (corrupt or encrypted input)."""

    error_code = "PQA_UPS_003"


class EmbeddingError(UpstreamError):
    """Embedding service call failed or returned malformed output."""

    error_code = "PQA_EMB_001"


class EmbeddingRateLimitError(EmbeddingError):
    """Embedding service quota or rate limit exceeded."""

    error_code = "PQA_EMB_002"
    http_status = 429


class LLMError(UpstreamError):
    """Completion service call failed."""

    error_code = "PQA_LLM_001"


class LLMRateLimitError(LLMError):
    """Completion service quota or rate limit exceeded."""

    error_code = "PQA_LLM_002"
    http_status = 429


class UpstreamTimeoutError(UpstreamError):
    """External call did not finish within its configured timeout."""

    error_code = "PQA_UPS_004"
    http_status = 504
