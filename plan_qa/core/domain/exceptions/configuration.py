"""Configuration-related exceptions for plan-qa."""

from .base import ErrorKind, PlanQAError


class ConfigurationError(PlanQAError):
    """Required configuration is missing or invalid."""

    error_code = "PQA_CFG_001"
    kind = ErrorKind.UNCONFIGURED
    http_status = 500


class MissingAPIKeyError(ConfigurationError):
    """Required API key is not configured."""

    error_code = "PQA_CFG_002"
