"""
API Request/Response Models

Pydantic schemas for the conversation HTTP surface.
"""
from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, Field


class WeatherAnalysisRequest(BaseModel):
    """Analysis handed over by the analytics dashboard."""
    location: str
    coordinates: str = ""
    date: str
    yearsSampled: int = Field(..., description="Size of the historical sample in years")
    probabilities: Dict[str, float]
    counts: Dict[str, int]


class SubmitRequest(BaseModel):
    """One user turn."""
    text: str = ""


class MessageResponse(BaseModel):
    id: int
    sender: str
    content: str
    timestamp: datetime


class ConversationResponse(BaseModel):
    """Snapshot of the conversation for the presentation layer."""
    messages: List[MessageResponse]
    awaiting_reply: bool


class SubmitResponse(ConversationResponse):
    accepted: bool


class ThresholdResponse(BaseModel):
    key: str
    title: str
    condition: str
    description: str


class HealthResponse(BaseModel):
    status: str
    version: str
    assistant_available: bool
