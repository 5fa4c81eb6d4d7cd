"""
Risk Summary

Ranks the condition probabilities of an analysis and classifies the dominant
one into a three-tier severity. Pure functions, no side effects.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from weather_chat.core.analysis import canonical_order, condition_label
from weather_chat.utils import InvalidInputError


HIGH_RISK_THRESHOLD = 0.30
MEDIUM_RISK_THRESHOLD = 0.15


class RiskLevel(str, Enum):
    """Severity tier of the dominant condition."""
    HIGH = "High"        # max probability >= 0.30
    MEDIUM = "Medium"    # 0.15 <= max probability < 0.30
    LOW = "Low"


def classify_severity(probability: float) -> RiskLevel:
    """Lower bounds are inclusive: 0.30 is High, 0.15 is Medium."""
    if probability >= HIGH_RISK_THRESHOLD:
        return RiskLevel.HIGH
    if probability >= MEDIUM_RISK_THRESHOLD:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


@dataclass(frozen=True)
class RiskSummary:
    """Dominant condition of an analysis, its percentage and severity tier."""
    dominant_condition: str
    dominant_percentage: float
    severity: RiskLevel

    @property
    def dominant_label(self) -> str:
        return condition_label(self.dominant_condition)

    @property
    def percentage_text(self) -> str:
        return f"{self.dominant_percentage:.1f}"

    def to_dict(self) -> dict:
        return {
            "dominant_condition": self.dominant_condition,
            "dominant_label": self.dominant_label,
            "dominant_percentage": self.dominant_percentage,
            "severity": self.severity.value,
        }


def summarize_risk(probabilities: Mapping[str, float]) -> RiskSummary:
    """
    Build the risk profile of a probability map.

    The dominant condition is the key with the highest probability. Ties go
    to the first key in canonical order, whatever order the map iterates in.

    Raises:
        InvalidInputError: if the map is empty
    """
    if not probabilities:
        raise InvalidInputError("Cannot summarise an empty probability map", field="probabilities")

    dominant = None
    for key in canonical_order(probabilities):
        # Strict comparison keeps the earliest key on ties
        if dominant is None or probabilities[key] > probabilities[dominant]:
            dominant = key

    top = probabilities[dominant]
    return RiskSummary(
        dominant_condition=dominant,
        dominant_percentage=round(top * 100, 1),
        severity=classify_severity(top),
    )
