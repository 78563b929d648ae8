"""Base exception classes for plan-qa.

Every exception raised by the application derives from :class:`PlanQAError`,
which carries:
- an error code for quick identification
- an :class:`ErrorKind` so callers can tell bad input from upstream failure
- the HTTP status the kind maps to
- the raise site (class, method, file, line), captured automatically
- an optional underlying cause and free-form debugging context
"""

import inspect
import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Coarse classification of failures, used to pick a response status."""

    INVALID_INPUT = "invalid_input"
    UNCONFIGURED = "unconfigured"
    UPSTREAM_FAILURE = "upstream_failure"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


@dataclass
class ExceptionContext:
    """Location where an exception was raised."""

    class_name: str
    method_name: str
    file_name: str
    line_number: int
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": self.class_name,
            "method": self.method_name,
            "file": self.file_name,
            "line": self.line_number,
            "timestamp": self.timestamp,
        }


class PlanQAError(Exception):
    """Base exception for all plan-qa errors.

    Example:
        try:
            store.fetch_bytes(document_id)
        except OSError as e:
            raise DocumentStoreError(
                str(e),
                cause=e,
                context={"document_id": document_id},
            ) from e
    """

    error_code: str = "PQA_ERR_001"
    kind: ErrorKind = ErrorKind.INTERNAL
    http_status: int = 500

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception with message and optional context.

        Args:
            message: Human-readable error message.
            cause: The underlying exception that caused this error.
            context: Additional key-value pairs for debugging.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.extra_context = context or {}
        self.location = self._capture_location()
        self.stack_trace = traceback.format_exc() if cause else None

    def _capture_location(self) -> ExceptionContext:
        """Capture class/method/file/line of the raise site."""
        frame = inspect.currentframe()
        # _capture_location -> __init__ (possibly several, for subclasses) -> raise site
        while frame is not None and (
            frame.f_code.co_name in ("_capture_location", "__init__")
            and isinstance(frame.f_locals.get("self"), PlanQAError)
        ):
            frame = frame.f_back

        if frame is None:
            return ExceptionContext("<unknown>", "<unknown>", "<unknown>", 0)

        instance = frame.f_locals.get("self")
        return ExceptionContext(
            class_name=type(instance).__name__ if instance is not None else "<module>",
            method_name=frame.f_code.co_name,
            file_name=frame.f_code.co_filename.split("\\")[-1].split("/")[-1],
            line_number=frame.f_lineno,
        )

    def to_dict(self, include_trace: bool = False) -> dict[str, Any]:
        """Convert exception to a structured dictionary for JSON output.

        Args:
            include_trace: If True, include the stack trace (debug mode).

        Returns:
            Dictionary with error details, location, and optional trace.
        """
        result: dict[str, Any] = {
            "error": {
                "type": type(self).__name__,
                "code": self.error_code,
                "kind": self.kind.value,
                "message": self.message,
            },
            "location": self.location.to_dict(),
        }

        if self.extra_context:
            result["context"] = self.extra_context

        if include_trace and self.stack_trace:
            result["stack_trace"] = [line for line in self.stack_trace.split("\n") if line.strip()]

        if self.cause:
            result["cause"] = {
                "type": type(self.cause).__name__,
                "message": str(self.cause),
            }

        return result
