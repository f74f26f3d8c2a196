"""
Shared fixtures: FlightAPI-shaped payload builders and an app client whose
orchestrator runs on mocked collaborators (no network, no API keys).
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from flight_assistant.agent.graph import QueryOrchestrator
from flight_assistant.models.schedule import Confidence, Mode, ModeAnalysis, ScheduleResult


def make_flight(
    number="EK1",
    airline="Emirates",
    airline_iata="EK",
    country="United Kingdom",
    country_code="GB",
    city="London Heathrow Airport",
    city_iata="LHR",
    side="origin",
    status="Scheduled",
    aircraft="Airbus A380-861",
    scheduled=1700000000,
    real=None,
):
    """One entry of FlightAPI's schedule `data` array."""
    return {
        "flight": {
            "identification": {"number": {"default": number}, "callsign": f"CS{number}"},
            "status": {"text": status},
            "aircraft": {"model": {"text": aircraft}, "registration": "A6-EDA"},
            "airline": {"name": airline, "code": {"iata": airline_iata}},
            "airport": {
                side: {
                    "name": city,
                    "code": {"iata": city_iata},
                    "position": {"country": {"name": country, "code": country_code}},
                },
            },
            "time": {
                "scheduled": {"departure": scheduled, "arrival": scheduled + 3600},
                "real": {"departure": real, "arrival": real},
            },
        }
    }


def make_payload(direction, flights, details=None, flightdiary=None):
    """A FlightAPI /schedule response for one direction."""
    plugin = {"schedule": {direction: {"data": flights}}}
    if details is not None:
        plugin["details"] = details
    if flightdiary is not None:
        plugin["flightdiary"] = flightdiary
    return {"airport": {"pluginData": plugin}}


@pytest.fixture
def arrivals():
    return [
        make_flight("EK2", country="United Kingdom", city="London Heathrow Airport"),
        make_flight("LH630", airline="Lufthansa", country="Germany", city="Frankfurt Airport"),
        make_flight("EK46", country="Germany", city="Frankfurt Airport"),
        make_flight("LH632", airline="Lufthansa", country="Germany", city="Munich Airport"),
    ]


@pytest.fixture
def departures():
    return [
        make_flight("EK1", side="destination", country="United Kingdom", city="London Heathrow Airport"),
        make_flight("BA106", airline="British Airways", side="destination",
                    country="United Kingdom", city="London Heathrow Airport"),
        make_flight("EK201", side="destination", country="United States", city="JFK"),
    ]


@pytest.fixture
def schedule_result(arrivals, departures):
    return ScheduleResult(
        airport="DXB",
        day_param=1,
        day_label="Today",
        arrivals=arrivals,
        departures=departures,
        raw_result={
            "arrivals": make_payload("arrivals", arrivals),
            "departures": make_payload("departures", departures),
        },
    )


@pytest.fixture
def relevant_analysis():
    return ModeAnalysis(
        relevant=True, mode=Mode.BOTH, reasoning="General airport question",
        confidence=Confidence.HIGH,
    )


@pytest.fixture
def fetcher(schedule_result):
    mock = MagicMock()
    mock.fetch_schedule = AsyncMock(return_value=schedule_result)
    mock.close = AsyncMock()
    return mock


@pytest.fixture
def classifier(relevant_analysis):
    mock = MagicMock()
    mock.classify = AsyncMock(return_value=relevant_analysis)
    return mock


@pytest.fixture
def generator():
    mock = MagicMock()
    mock.generate_answer = AsyncMock(return_value="Looking at the data, DXB has 7 flights today.")
    return mock


@pytest.fixture
def orchestrator(fetcher, classifier, generator):
    return QueryOrchestrator(fetcher, classifier, generator)


@pytest.fixture
def client(orchestrator):
    """App client without running the lifespan; the orchestrator is injected."""
    from flight_assistant.main import app
    app.state.orchestrator = orchestrator
    return TestClient(app)
