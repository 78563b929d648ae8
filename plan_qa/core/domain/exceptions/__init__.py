"""Exception hierarchy for plan-qa.

All exceptions derive from :class:`PlanQAError` and are re-exported here:

    from plan_qa.core.domain.exceptions import PlanQAError, EmbeddingError
"""

from .base import ErrorKind, ExceptionContext, PlanQAError
from .cancellation import RequestCancelledError
from .configuration import ConfigurationError, MissingAPIKeyError
from .upstream import (
    DocumentStoreError,
    EmbeddingError,
    EmbeddingRateLimitError,
    LLMError,
    LLMRateLimitError,
    PDFExtractionError,
    UpstreamError,
    UpstreamTimeoutError,
)
from .validation import (
    DocumentNotFoundError,
    EmptyQueryError,
    InvalidUploadError,
    QueryTooLongError,
    ValidationError,
)

__all__ = [
    # Base
    "ErrorKind",
    "ExceptionContext",
    "PlanQAError",
    # Invalid input
    "ValidationError",
    "EmptyQueryError",
    "QueryTooLongError",
    "DocumentNotFoundError",
    "InvalidUploadError",
    # Configuration
    "ConfigurationError",
    "MissingAPIKeyError",
    # Upstream
    "UpstreamError",
    "DocumentStoreError",
    "PDFExtractionError",
    "EmbeddingError",
    "EmbeddingRateLimitError",
    "LLMError",
    "LLMRateLimitError",
    "UpstreamTimeoutError",
    # Cancellation
    "RequestCancelledError",
]
