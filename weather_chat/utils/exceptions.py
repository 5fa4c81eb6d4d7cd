"""
Custom Exception Hierarchy

Error taxonomy for the weather planning assistant. Only InvalidInputError
escapes to callers; the remote-call errors are carried inside an
AssistantResult and replaced by fallback advice.
"""
from typing import Optional, Dict, Any


class WeatherAssistantError(Exception):
    """Base exception for all weather assistant errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses and diagnostics."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class InvalidInputError(WeatherAssistantError):
    """Malformed weather analysis supplied by the analytics collaborator."""

    def __init__(
        self,
        message: str,
        field: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="INVALID_INPUT",
            details={"field": field, **(details or {})}
        )
        self.field = field


class ConfigurationError(WeatherAssistantError):
    """Missing or placeholder service credential."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details
        )


class TransportError(WeatherAssistantError):
    """Non-success status (or no response at all) from the remote service."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="TRANSPORT_ERROR",
            details={"status_code": status_code, "body": body, **(details or {})}
        )
        self.status_code = status_code
        self.body = body


class MalformedResponseError(WeatherAssistantError):
    """Remote response did not have the expected candidates shape."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="MALFORMED_RESPONSE",
            details=details
        )
