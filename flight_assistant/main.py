"""
FastAPI application entry point.
Lifespan builds the pipeline once: config structs → clients → orchestrator.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flight_assistant.agent.answer import AnswerGenerator
from flight_assistant.agent.classifier import ModeClassifier
from flight_assistant.agent.graph import QueryOrchestrator
from flight_assistant.agent.llm import get_answer_llm, get_classification_llm
from flight_assistant.config import Settings, settings
from flight_assistant.middleware import RequestLoggingMiddleware
from flight_assistant.routers import flights
from flight_assistant.services.schedule import ScheduleFetcher

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)


def build_orchestrator(app_settings: Settings) -> QueryOrchestrator:
    """Wire every pipeline component from explicit config structs."""
    llm_config = app_settings.llm_config()
    return QueryOrchestrator(
        fetcher=ScheduleFetcher(app_settings.schedule_api_config()),
        classifier=ModeClassifier(get_classification_llm(llm_config)),
        generator=AnswerGenerator(get_answer_llm(llm_config), top_n=app_settings.prompt_top_n),
        model_label=llm_config.model_label,
        summary_top_n=app_settings.summary_top_n,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    if not settings.flight_api_key or not settings.openrouter_api_key:
        logging.getLogger("flight-assistant").warning(
            "FLIGHT_API_KEY / OPENROUTER_API_KEY not configured, queries will fail upstream"
        )
    orchestrator = build_orchestrator(settings)
    app.state.orchestrator = orchestrator
    yield
    # Shutdown
    await orchestrator.close()


app = FastAPI(
    title="Flight Assistant AI",
    description="Ask natural-language questions about an airport's flight schedule",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Custom middleware
app.add_middleware(RequestLoggingMiddleware)

# Routers
app.include_router(flights.router, prefix="/api/flights", tags=["Flights"])
