"""
Custom exceptions for VC Scout.

Provides a hierarchy of exceptions so the API boundary can map failures
to status codes in a single place.
"""

from enum import Enum
from typing import Any, Dict, Optional


class VCScoutError(Exception):
    """Base exception for all VC Scout errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(VCScoutError):
    """Raised when a required credential or setting is missing."""

    pass


class InputValidationError(VCScoutError):
    """Raised when an enrichment request is missing required fields."""

    pass


class ExtractionErrorKind(str, Enum):
    """Failure modes of the LLM extraction step."""

    PARSE_FAILURE = "parse_failure"
    SERVICE_UNAVAILABLE = "service_unavailable"
    AUTH_FAILURE = "auth_failure"
    TIMEOUT = "timeout"


class ExtractionError(VCScoutError):
    """LLM extraction failed, either calling the service or parsing its output."""

    def __init__(
        self,
        message: str,
        kind: ExtractionErrorKind = ExtractionErrorKind.SERVICE_UNAVAILABLE,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.kind = kind

    @property
    def is_auth_failure(self) -> bool:
        return self.kind == ExtractionErrorKind.AUTH_FAILURE
