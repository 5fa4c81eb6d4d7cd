"""
Fallback Advisor

Deterministic stand-in for the remote assistant. Used whenever a turn cannot
be answered remotely; depends only on the risk summary, never on the
question text.
"""
from weather_chat.core.risk import RiskLevel, RiskSummary


GUIDANCE = {
    RiskLevel.HIGH: (
        "**High risk** of {condition} conditions detected. Consider indoor "
        "alternatives or comprehensive backup plans."
    ),
    RiskLevel.MEDIUM: (
        "**Medium risk** identified, mainly from {condition} conditions. Maintain "
        "flexible scheduling and monitor forecasts regularly."
    ),
    RiskLevel.LOW: (
        "**Low risk** assessment. {condition} is the most likely condition, but "
        "conditions appear favorable for outdoor events."
    ),
}


def build_fallback_message(summary: RiskSummary, location: str, date: str) -> str:
    """
    Advisory paragraph for a degraded turn.

    Identical inputs always produce identical output.
    """
    label = summary.dominant_label
    condition = label if summary.severity is RiskLevel.LOW else label.lower()
    guidance = GUIDANCE[summary.severity].format(condition=condition)

    return (
        "I'm currently unable to connect to the assistant service.\n\n"
        f"Based on the analysis for **{location}** on **{date}**:\n\n"
        f"{guidance}\n\n"
        "Please let me know if you need specific recommendations."
    )
