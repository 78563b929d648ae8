"""Cancellation exception for plan-qa."""

from .base import ErrorKind, PlanQAError


class RequestCancelledError(PlanQAError):
    """The caller cancelled the request before generation started."""

    error_code = "PQA_CAN_001"
    kind = ErrorKind.CANCELLED
    # nginx convention for "client closed request"
    http_status = 499
