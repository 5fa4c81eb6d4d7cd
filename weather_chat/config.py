"""
Weather Planning Assistant — Configuration
==========================================
Centralised settings for the Gemini credential, model and logging.
Loads secrets from the project-level .env file.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# ── Paths ───────────────────────────────────────────────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# ── Load .env ───────────────────────────────────────────────────────────
load_dotenv(PROJECT_ROOT / ".env")

# ── Defaults ────────────────────────────────────────────────────────────
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_TIMEOUT_SECONDS = 30.0

# Values shipped in sample .env files; treated the same as an unset key
PLACEHOLDER_API_KEYS = frozenset({"YOUR_API_KEY_HERE", "your-api-key", "changeme"})


def read_api_key() -> Optional[str]:
    """GEMINI_API_KEY, falling back to GOOGLE_API_KEY. None when neither is set."""
    return os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")


@dataclass(frozen=True)
class Settings:
    """
    Process-wide settings resolved from the environment.

    Only the credential, model name and log level come from the environment;
    endpoint and timeout are GeminiConfig defaults set by the caller.
    """
    gemini_api_key: Optional[str]
    gemini_model: str = DEFAULT_GEMINI_MODEL
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings(
        gemini_api_key=read_api_key(),
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


settings = get_settings()
