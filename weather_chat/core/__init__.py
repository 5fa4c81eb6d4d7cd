"""
Conversational Context & Degradation Engine

Risk summary -> context synthesis -> remote assistant, with deterministic
fallback advice whenever the remote turn cannot complete.
"""
from .analysis import WeatherAnalysis, CONDITION_KEYS, THRESHOLDS, condition_label
from .risk import RiskLevel, RiskSummary, summarize_risk, classify_severity
from .context import ContextSynthesizer, build_context
from .fallback import build_fallback_message
from .conversation import (
    ConversationController,
    ConversationMessage,
    ConversationState,
    Sender,
)

__all__ = [
    "WeatherAnalysis",
    "CONDITION_KEYS",
    "THRESHOLDS",
    "condition_label",
    "RiskLevel",
    "RiskSummary",
    "summarize_risk",
    "classify_severity",
    "ContextSynthesizer",
    "build_context",
    "build_fallback_message",
    "ConversationController",
    "ConversationMessage",
    "ConversationState",
    "Sender",
]
