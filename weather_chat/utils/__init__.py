"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    WeatherAssistantError,
    InvalidInputError,
    ConfigurationError,
    TransportError,
    MalformedResponseError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "WeatherAssistantError",
    "InvalidInputError",
    "ConfigurationError",
    "TransportError",
    "MalformedResponseError",
]
