"""
Pydantic models for the /api/flights endpoints.

QueryRequest is deliberately loose: the UI expects 400s with specific error
codes (INVALID_AIRPORT, INVALID_DAY_PARAMETER, ...) rather than FastAPI's
generic 422, so field checks live in the orchestrator's validation step.
"""
from typing import Any

from flight_assistant.models.schedule import CamelModel, ScheduleSummary


class QueryRequest(CamelModel):
    airport: Any = None
    question: Any = None
    date: Any = None


class CountryCount(CamelModel):
    country: str
    count: int


class DirectionSummary(CamelModel):
    total: int
    top_countries: list[CountryCount] = []
    top_airlines: list[str] = []


class AnalysisOut(CamelModel):
    mode: str
    reasoning: str
    confidence: str
    relevant: bool | None = None


class QueryData(CamelModel):
    day_param: int
    day_label: str
    summary: ScheduleSummary
    arrivals: DirectionSummary
    departures: DirectionSummary
    # Complete FlightAPI response, for the UI's raw-data view
    raw_result: dict[str, Any] = {}


class ResponseMetadata(CamelModel):
    response_time: str
    timestamp: str
    data_source: str | None = None
    ai_model: str | None = None
    flight_api_mode: str | None = None
    flight_api_called: bool | None = None


class QueryResponse(CamelModel):
    success: bool = True
    airport: str
    airport_name: str
    question: str
    answer: str
    analysis: AnalysisOut
    data: QueryData | None = None
    metadata: ResponseMetadata


class ErrorResponse(CamelModel):
    error: str
    code: str
    airport: Any = None
    question: Any = None
    metadata: ResponseMetadata


class Airport(CamelModel):
    code: str
    name: str
    city: str
    country: str


class AirportsResponse(CamelModel):
    airports: list[Airport]
    total: int
    metadata: dict[str, Any]
