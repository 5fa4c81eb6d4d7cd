"""
Weather Planning Assistant - FastAPI Application

HTTP surface for one planning conversation:
- Start a conversation from a weather analysis
- Submit user turns and read the message log
- Static threshold reference and quick suggestions
"""
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from weather_chat import __version__
from weather_chat.config import settings
from weather_chat.core import THRESHOLDS, ConversationController, WeatherAnalysis
from weather_chat.core.conversation import QUICK_SUGGESTIONS
from weather_chat.core.llm import GeminiClient, GeminiConfig
from weather_chat.models import (
    ConversationResponse,
    HealthResponse,
    SubmitRequest,
    SubmitResponse,
    ThresholdResponse,
    WeatherAnalysisRequest,
)
from weather_chat.utils import InvalidInputError, get_logger, setup_logging

setup_logging(settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Weather Planning Assistant API ready to accept requests")
    yield
    logger.info("Weather Planning Assistant API shut down.")


def create_app(client: Optional[GeminiClient] = None) -> FastAPI:
    """
    Build the application.

    Args:
        client: Gemini client shared by every conversation; built from
            settings when omitted
    """
    app = FastAPI(
        title="Weather Planning Assistant API",
        description="Conversational interpretation of historical weather-risk probabilities",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Single conversation per process, replaced when a new analysis arrives
    app.state.client = client or GeminiClient(GeminiConfig.from_settings(settings))
    app.state.conversation = None

    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError):
        logger.warning(f"Rejected weather analysis: {exc.message}")
        return JSONResponse(status_code=422, content=exc.to_dict())

    def _current(request: Request) -> ConversationController:
        conversation = request.app.state.conversation
        if conversation is None:
            raise HTTPException(status_code=404, detail="No conversation started")
        return conversation

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health(request: Request):
        return {
            "status": "healthy",
            "version": __version__,
            "assistant_available": request.app.state.client.is_available,
        }

    @app.post("/api/v1/conversation", response_model=ConversationResponse, tags=["Conversation"])
    async def start_conversation(body: WeatherAnalysisRequest, request: Request):
        analysis = WeatherAnalysis.from_dict(body.model_dump())
        conversation = ConversationController(analysis, client=request.app.state.client)
        request.app.state.conversation = conversation
        return conversation.to_dict()

    @app.get("/api/v1/conversation", response_model=ConversationResponse, tags=["Conversation"])
    async def get_conversation(request: Request):
        return _current(request).to_dict()

    @app.post("/api/v1/conversation/messages", response_model=SubmitResponse, tags=["Conversation"])
    async def submit_message(body: SubmitRequest, request: Request):
        conversation = _current(request)
        reply = await conversation.submit(body.text)
        return {**conversation.to_dict(), "accepted": reply is not None}

    @app.get("/api/v1/thresholds", response_model=List[ThresholdResponse], tags=["Reference"])
    async def list_thresholds():
        return [t.to_dict() for t in THRESHOLDS.values()]

    @app.get("/api/v1/suggestions", response_model=List[str], tags=["Reference"])
    async def list_suggestions():
        return list(QUICK_SUGGESTIONS)

    return app


app = create_app()
