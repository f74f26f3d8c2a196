"""
Flights router: the three endpoints the UI talks to.

POST /query runs the whole question → answer pipeline. The orchestrator already
returns (status, payload) for every outcome, so the handler just relays it.
/airports and /health are static and never call upstream services.
"""
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from flight_assistant.airports import SUPPORTED_AIRPORTS
from flight_assistant.models.query import Airport, AirportsResponse, QueryRequest

logger = logging.getLogger("flight-assistant.http")

router = APIRouter()


@router.post("/query")
async def query(body: QueryRequest, request: Request):
    """Answer a natural-language question about one airport's schedule."""
    orchestrator = request.app.state.orchestrator
    status_code, payload = await orchestrator.run(body)
    return JSONResponse(status_code=status_code, content=payload)


@router.get("/airports", response_model=AirportsResponse)
async def airports():
    return AirportsResponse(
        airports=[Airport(**a) for a in SUPPORTED_AIRPORTS],
        total=len(SUPPORTED_AIRPORTS),
        metadata={"timestamp": datetime.now(timezone.utc).isoformat()},
    )


@router.get("/health")
async def health():
    # Deliberately doesn't ping FlightAPI or the LLM: both calls cost money
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {
            "flightApi": "Not tested (avoiding unnecessary API calls)",
            "llm": "Not tested",
        },
    }
