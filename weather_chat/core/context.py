"""
Context Synthesizer

Builds the grounding text sent ahead of every user question so the remote
model can answer planning questions without re-deriving the risk itself.
"""
from __future__ import annotations

from typing import List

from weather_chat.core.analysis import (
    THRESHOLDS,
    WeatherAnalysis,
    canonical_order,
    condition_label,
)


class ContextSynthesizer:
    """
    Renders a WeatherAnalysis as a system context block.

    Every condition in the analysis is listed in canonical order with its
    probability to one decimal place. No I/O.
    """

    PREAMBLE = (
        "You are a weather planning assistant helping users make decisions "
        "about outdoor events."
    )
    CLOSING = "Focus on actionable advice, encouragement, and weather risk mitigation."

    def __init__(self, include_thresholds: bool = True):
        self.include_thresholds = include_thresholds

    def render_probabilities(self, analysis: WeatherAnalysis) -> str:
        """'Very Hot: 35.0%, Very Cold: 2.0%, ...' in canonical order."""
        return ", ".join(
            f"{condition_label(key)}: {analysis.probabilities[key] * 100:.1f}%"
            for key in canonical_order(analysis.probabilities)
        )

    def _render_thresholds(self, analysis: WeatherAnalysis) -> List[str]:
        lines = ["Condition definitions:"]
        for key in canonical_order(analysis.probabilities):
            threshold = THRESHOLDS.get(key)
            if threshold is not None:
                lines.append(f"- {threshold.title}: {threshold.condition}")
        return lines

    def build(self, analysis: WeatherAnalysis) -> str:
        lines = [
            self.PREAMBLE,
            "",
            f"Location: {analysis.location} ({analysis.coordinates})",
            f"Date: {analysis.date}",
            f"Data source: {analysis.years_sampled} years of NASA POWER satellite data",
            "",
            f"Probabilities: {self.render_probabilities(analysis)}",
        ]
        if self.include_thresholds:
            lines.append("")
            lines.extend(self._render_thresholds(analysis))
        lines.extend(["", self.CLOSING])
        return "\n".join(lines)


def build_context(analysis: WeatherAnalysis) -> str:
    """Context block with the default synthesizer settings."""
    return ContextSynthesizer().build(analysis)
