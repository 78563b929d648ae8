"""Input validation exceptions for plan-qa."""

from .base import ErrorKind, PlanQAError


class ValidationError(PlanQAError):
    """Input validation failed."""

    error_code = "PQA_VAL_001"
    kind = ErrorKind.INVALID_INPUT
    http_status = 400


class EmptyQueryError(ValidationError):
    """Question cannot be empty or whitespace only."""

    error_code = "PQA_VAL_002"


class QueryTooLongError(ValidationError):
    """Question exceeds maximum allowed length."""

    error_code = "PQA_VAL_003"


class DocumentNotFoundError(ValidationError):
    """A selected document id is not in the document store."""

    error_code = "PQA_VAL_004"
    http_status = 404


class InvalidUploadError(ValidationError):
    """Uploaded file was rejected (not a PDF, too large, empty)."""

    error_code = "PQA_VAL_005"
