"""
Gemini API Client

Single request/response exchange with the Gemini generateContent endpoint.
Failures come back as a tagged AssistantResult instead of an exception so the
conversation can substitute fallback advice explicitly.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional
from enum import Enum
from datetime import datetime

import httpx

from weather_chat.config import (
    DEFAULT_GEMINI_BASE_URL,
    DEFAULT_TIMEOUT_SECONDS,
    PLACEHOLDER_API_KEYS,
    Settings,
    read_api_key,
)
from weather_chat.utils import (
    get_logger,
    WeatherAssistantError,
    ConfigurationError,
    TransportError,
    MalformedResponseError,
)

logger = get_logger(__name__)


class GeminiModel(str, Enum):
    """Gemini models the assistant is known to work with."""
    FLASH_2_5 = "gemini-2.5-flash"  # Stable standard
    FLASH_2_5_LITE = "gemini-2.5-flash-lite"
    FLASH_2_0 = "gemini-2.0-flash"


# Generation parameters are fixed for every turn
TEMPERATURE = 0.7
TOP_K = 40
TOP_P = 0.95
MAX_OUTPUT_TOKENS = 250

STYLE_GUIDELINES = """Guidelines:
- Keep responses under **6-7 lines**.
- Focus on practical and clear weather planning advice.
- Avoid repetition or lengthy explanations.
- Bold the highlighted text that is necessary.
- Always end with a short concluding line."""


class FailureKind(str, Enum):
    """Why a remote turn produced no answer."""
    CONFIGURATION_ERROR = "configuration_error"
    TRANSPORT_ERROR = "transport_error"
    MALFORMED_RESPONSE = "malformed_response"


_FAILURE_KINDS = {
    ConfigurationError: FailureKind.CONFIGURATION_ERROR,
    TransportError: FailureKind.TRANSPORT_ERROR,
    MalformedResponseError: FailureKind.MALFORMED_RESPONSE,
}


@dataclass
class GeminiConfig:
    """Configuration for Gemini client. Lives as long as the conversation."""
    api_key: Optional[str] = field(default_factory=read_api_key)
    model: str = GeminiModel.FLASH_2_5.value
    base_url: str = DEFAULT_GEMINI_BASE_URL
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiConfig":
        return cls(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
        )

    @property
    def has_usable_key(self) -> bool:
        key = (self.api_key or "").strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS

    @property
    def is_known_model(self) -> bool:
        return self.model in {m.value for m in GeminiModel}


@dataclass
class AssistantResult:
    """Outcome of one remote turn: genuine text or a tagged failure."""
    text: Optional[str] = None
    error: Optional[WeatherAssistantError] = None
    model: str = ""
    latency_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None

    @property
    def failure_kind(self) -> Optional[FailureKind]:
        if self.error is None:
            return None
        return _FAILURE_KINDS.get(type(self.error), FailureKind.TRANSPORT_ERROR)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "text": self.text,
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "error": self.error.to_dict() if self.error else None,
            "model": self.model,
            "latency_ms": round(self.latency_ms, 2),
        }


def build_prompt(user_text: str, context_text: str) -> str:
    """Context, the verbatim question, then the fixed style directive."""
    return f"{context_text}\n\nUser Question: {user_text}\n\n{STYLE_GUIDELINES}"


def build_payload(user_text: str, context_text: str) -> Dict[str, Any]:
    """Request body in the shape generateContent expects."""
    return {
        "contents": [
            {"parts": [{"text": build_prompt(user_text, context_text)}]}
        ],
        "generationConfig": {
            "temperature": TEMPERATURE,
            "topK": TOP_K,
            "topP": TOP_P,
            "maxOutputTokens": MAX_OUTPUT_TOKENS,
        },
    }


def extract_text(data: Any) -> str:
    """
    Text of the first candidate.

    Reads ``candidates[0].content.parts[0].text``, or the legacy
    ``candidates[0].output`` string.

    Raises:
        MalformedResponseError: if neither holds a non-blank string
    """
    try:
        candidate = data["candidates"][0]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError(
            "Response has no candidates",
            details={"keys": sorted(data) if isinstance(data, dict) else type(data).__name__},
        ) from e

    text = None
    try:
        text = candidate["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        if isinstance(candidate, dict):
            text = candidate.get("output")

    if not isinstance(text, str) or not text.strip():
        finish_reason = candidate.get("finishReason") if isinstance(candidate, dict) else None
        raise MalformedResponseError(
            "First candidate carries no text",
            details={"finish_reason": finish_reason},
        )
    return text


class GeminiClient:
    """
    Client for the Gemini REST API.

    One outbound call per ``ask``; no retries, no caching. The client never
    makes up an answer: it returns the remote text or a failure.
    """

    def __init__(
        self,
        config: Optional[GeminiConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            config: Optional configuration, uses environment defaults if not provided
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.config = config or GeminiConfig()
        self._transport = transport
        self._request_count = 0
        self._last_request_time = None

        if self.is_available:
            logger.info(f"Gemini client initialized with model: {self.config.model}")
        else:
            logger.warning("No usable Gemini API key configured - fallback advice will be used")

        if not self.config.is_known_model:
            logger.warning(
                f"Unrecognized Gemini model '{self.config.model}'; "
                f"known models: {', '.join(m.value for m in GeminiModel)}"
            )

    @property
    def is_available(self) -> bool:
        """True when a real (non-placeholder) API key is configured."""
        return self.config.has_usable_key

    @property
    def endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/models/{self.config.model}:generateContent"

    async def ask(self, user_text: str, context_text: str) -> AssistantResult:
        """
        Send one question with its context.

        Args:
            user_text: The user's question, passed through verbatim
            context_text: Grounding block from the context synthesizer

        Returns:
            AssistantResult with either the remote text or the failure
        """
        start_time = datetime.now()
        try:
            text = await self._generate(user_text, context_text)
        except WeatherAssistantError as e:
            latency = (datetime.now() - start_time).total_seconds() * 1000
            logger.error(f"Gemini call failed [{e.code}]: {e.message} {e.details}")
            return AssistantResult(error=e, model=self.config.model, latency_ms=latency)

        latency = (datetime.now() - start_time).total_seconds() * 1000
        logger.info(f"Gemini response received ({latency:.0f} ms)")
        return AssistantResult(text=text, model=self.config.model, latency_ms=latency)

    async def _generate(self, user_text: str, context_text: str) -> str:
        if not self.is_available:
            raise ConfigurationError(
                "Gemini API key not configured",
                details={"placeholder": bool(self.config.api_key)},
            )

        payload = build_payload(user_text, context_text)
        logger.info(f"Calling Gemini API ({self.config.model})...")

        self._request_count += 1
        self._last_request_time = datetime.now()

        try:
            async with httpx.AsyncClient(
                transport=self._transport,
                timeout=self.config.request_timeout_seconds,
            ) as client:
                response = await client.post(
                    self.endpoint,
                    json=payload,
                    # Credential travels in a header, never in the URL
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": self.config.api_key,
                    },
                )
        except httpx.HTTPError as e:
            raise TransportError(
                f"Gemini request failed: {e.__class__.__name__}",
                details={"reason": str(e)},
            ) from e

        if not response.is_success:
            raise TransportError(
                f"API Error {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Response body is not JSON",
                details={"body": response.text[:200]},
            ) from e

        return extract_text(data)

    def get_stats(self) -> Dict[str, Any]:
        """Get client statistics."""
        return {
            "is_available": self.is_available,
            "model": self.config.model,
            "request_count": self._request_count,
            "last_request": self._last_request_time.isoformat() if self._last_request_time else None
        }
