"""
Conversation Controller

Owns the append-only message log of one planning conversation and the
IDLE -> AWAITING -> IDLE turn cycle. Every accepted user turn ends with
exactly one assistant message: the remote answer or the fallback advice.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from weather_chat.core.analysis import WeatherAnalysis
from weather_chat.core.context import ContextSynthesizer
from weather_chat.core.fallback import build_fallback_message
from weather_chat.core.llm import AssistantResult, GeminiClient
from weather_chat.core.risk import RiskSummary, summarize_risk
from weather_chat.utils import get_logger, TransportError

logger = get_logger(__name__)


QUICK_SUGGESTIONS = (
    "What outdoor event strategies do you recommend?",
    "How should I mitigate weather risks?",
    "What backup plans should I prepare?",
    "When is the optimal time for this event?",
)


class Sender(str, Enum):
    ASSISTANT = "assistant"
    USER = "user"


class ConversationState(str, Enum):
    IDLE = "idle"          # no remote call outstanding
    AWAITING = "awaiting"  # exactly one remote call outstanding


@dataclass(frozen=True)
class ConversationMessage:
    """One entry of the message log. Assistant content may contain **bold** markup."""
    id: int
    sender: Sender
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sender": self.sender.value,
            "content": self.content,
            "timestamp": self.timestamp.isoformat(),
        }


def build_opening_message(analysis: WeatherAnalysis, summary: RiskSummary) -> str:
    """Greeting that summarises the analysis before the first question."""
    return (
        "Hello. I'm your Weather Planning Assistant.\n\n"
        f"I've analyzed the weather data for **{analysis.location}** on **{analysis.date}**.\n\n"
        "**Analysis Summary:**\n"
        f"- Primary risk: {summary.dominant_label} ({summary.percentage_text}% probability)\n"
        f"- Risk assessment: {summary.severity.value}\n"
        f"- Data based on {analysis.years_sampled} years of NASA satellite observations\n\n"
        "I can help you with event planning strategies, risk mitigation, "
        "alternative arrangements, and seasonal insights.\n\n"
        "How can I assist you today?"
    )


class ConversationController:
    """
    Turn-based conversation about one WeatherAnalysis.

    Single-threaded: the remote call is the only suspension point, and the
    AWAITING state is entered before it, so overlapping submissions are
    dropped rather than queued.
    """

    def __init__(
        self,
        analysis: WeatherAnalysis,
        client: Optional[GeminiClient] = None,
        synthesizer: Optional[ContextSynthesizer] = None,
    ):
        """
        Start a conversation and post the opening message.

        Args:
            analysis: Validated analysis; an invalid one never gets this far
                because WeatherAnalysis raises InvalidInputError on construction
            client: Remote assistant client, built from the environment if omitted
            synthesizer: Context synthesizer, default settings if omitted
        """
        self.analysis = analysis
        self.client = client or GeminiClient()
        self.synthesizer = synthesizer or ContextSynthesizer()
        self.summary = summarize_risk(analysis.probabilities)
        self.state = ConversationState.IDLE
        self._messages: List[ConversationMessage] = []
        self._turn_count = 0
        self._fallback_count = 0

        self._append(Sender.ASSISTANT, self.opening_message())
        logger.info(
            f"Conversation started for {analysis.location} on {analysis.date} "
            f"(primary risk {self.summary.dominant_condition}, {self.summary.severity.value})"
        )

    # ── Read-only surface ────────────────────────────────────────────────
    @property
    def messages(self) -> Tuple[ConversationMessage, ...]:
        return tuple(self._messages)

    @property
    def awaiting_reply(self) -> bool:
        return self.state is ConversationState.AWAITING

    @property
    def quick_suggestions(self) -> Tuple[str, ...]:
        return QUICK_SUGGESTIONS

    def opening_message(self) -> str:
        return build_opening_message(self.analysis, self.summary)

    def fallback_message(self) -> str:
        return build_fallback_message(self.summary, self.analysis.location, self.analysis.date)

    # ── Turns ────────────────────────────────────────────────────────────
    async def submit(self, text: str) -> Optional[ConversationMessage]:
        """
        Run one user turn.

        Returns:
            The assistant reply appended for this turn, or None when the
            submission was discarded (blank input or a reply still pending)
        """
        question = (text or "").strip()
        if not question:
            logger.debug("Ignoring blank submission")
            return None
        if self.state is ConversationState.AWAITING:
            logger.info("Ignoring submission while a reply is pending")
            return None

        self._append(Sender.USER, question)
        self.state = ConversationState.AWAITING
        self._turn_count += 1

        reply = None
        try:
            result = await self._ask(question)
            if result.ok:
                reply = self._append(Sender.ASSISTANT, result.text)
            else:
                kind = result.failure_kind.value if result.failure_kind else "unknown"
                logger.warning(f"Turn {self._turn_count} degraded to fallback advice ({kind})")
                reply = self._reply_with_fallback()
        finally:
            if reply is None:
                # Cancelled mid-call; the turn still gets its reply
                reply = self._reply_with_fallback()
            self.state = ConversationState.IDLE
        return reply

    async def _ask(self, question: str) -> AssistantResult:
        context = self.synthesizer.build(self.analysis)
        try:
            return await self.client.ask(question, context)
        except Exception as e:
            logger.exception(f"Unexpected error from assistant client: {e}")
            return AssistantResult(error=TransportError(f"Unexpected client failure: {e}"))

    def _reply_with_fallback(self) -> ConversationMessage:
        self._fallback_count += 1
        return self._append(Sender.ASSISTANT, self.fallback_message())

    def _append(self, sender: Sender, content: str) -> ConversationMessage:
        message = ConversationMessage(
            id=len(self._messages) + 1,
            sender=sender,
            content=content,
        )
        self._messages.append(message)
        return message

    def get_stats(self) -> Dict[str, Any]:
        """Get conversation statistics."""
        return {
            "state": self.state.value,
            "message_count": len(self._messages),
            "turn_count": self._turn_count,
            "fallback_count": self._fallback_count,
            "summary": self.summary.to_dict(),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messages": [m.to_dict() for m in self._messages],
            "awaiting_reply": self.awaiting_reply,
        }
