"""
Pytest Configuration and Fixtures

Shared fixtures for the weather planning assistant tests.
"""
import json
import pytest
import httpx
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from weather_chat.core import WeatherAnalysis
from weather_chat.core.llm import GeminiClient, GeminiConfig


@pytest.fixture
def scenario_a_probabilities() -> dict:
    """Very Hot dominates at 35%."""
    return {
        "veryHot": 0.35,
        "veryCold": 0.02,
        "veryWindy": 0.10,
        "veryWet": 0.05,
        "veryUncomfortable": 0.20,
    }


@pytest.fixture
def sample_counts() -> dict:
    return {
        "veryHot": 7,
        "veryCold": 0,
        "veryWindy": 2,
        "veryWet": 1,
        "veryUncomfortable": 4,
    }


@pytest.fixture
def sample_analysis(scenario_a_probabilities, sample_counts) -> WeatherAnalysis:
    """Twenty-year analysis for Phoenix in July."""
    return WeatherAnalysis(
        location="Phoenix, AZ",
        coordinates="33.45°N, 112.07°W",
        date="July 15, 2025",
        years_sampled=20,
        probabilities=scenario_a_probabilities,
        counts=sample_counts,
    )


@pytest.fixture
def analysis_payload(scenario_a_probabilities, sample_counts) -> dict:
    """Same analysis in the camelCase wire shape."""
    return {
        "location": "Phoenix, AZ",
        "coordinates": "33.45°N, 112.07°W",
        "date": "July 15, 2025",
        "yearsSampled": 20,
        "probabilities": scenario_a_probabilities,
        "counts": sample_counts,
    }


def _gemini_body(text: str) -> dict:
    return {
        "candidates": [
            {"content": {"parts": [{"text": text}], "role": "model"}, "finishReason": "STOP"}
        ]
    }


@pytest.fixture
def gemini_reply():
    """Successful generateContent body for a given text."""
    return _gemini_body


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler):
        self.requests = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def make_client():
    """Build a GeminiClient whose HTTP traffic is answered by ``handler``."""
    def _make(handler, api_key: str = "test-key"):
        transport = RecordingTransport(handler)
        client = GeminiClient(GeminiConfig(api_key=api_key), transport=transport)
        return client, transport
    return _make
