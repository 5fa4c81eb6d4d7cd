"""
LLM Module

Gemini client used to answer planning questions about an already-computed
weather-risk analysis. The model explains risk; it never assigns it.
"""
from .gemini_client import (
    GeminiClient,
    GeminiConfig,
    GeminiModel,
    AssistantResult,
    FailureKind,
)

__all__ = [
    "GeminiClient",
    "GeminiConfig",
    "GeminiModel",
    "AssistantResult",
    "FailureKind",
]
