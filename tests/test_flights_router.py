"""
Tests for the /api/flights endpoints.

The orchestrator runs for real on mocked collaborators, so these cover the
HTTP contract: status codes, camelCase payloads, and the static endpoints.
"""
from unittest.mock import patch

from flight_assistant.errors import UpstreamRateLimitError


def test_airports_lists_supported_set(client):
    resp = client.get("/api/flights/airports")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 6
    codes = [a["code"] for a in data["airports"]]
    assert codes == ["DXB", "LHR", "CDG", "SIN", "HKG", "AMS"]
    assert data["airports"][0]["city"] == "Dubai"
    assert "timestamp" in data["metadata"]


def test_health_makes_no_upstream_calls(client, fetcher, classifier):
    resp = client.get("/api/flights/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "OK"
    assert set(data["services"]) == {"flightApi", "llm"}
    assert fetcher.fetch_schedule.await_count == 0
    assert classifier.classify.await_count == 0


def test_query_success(client):
    resp = client.post("/api/flights/query", json={
        "airport": "DXB", "question": "Which countries send the most flights?", "date": 1,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["metadata"]["flightApiCalled"] is True
    assert data["data"]["dayLabel"] == "Today"


def test_query_unsupported_airport_is_400(client, fetcher, generator):
    resp = client.post("/api/flights/query", json={"airport": "ZZZ", "question": "How many flights?"})
    assert resp.status_code == 400
    assert resp.json()["code"] == "UNSUPPORTED_AIRPORT"
    assert fetcher.fetch_schedule.await_count == 0
    assert generator.generate_answer.await_count == 0


def test_query_missing_fields_is_400_not_422(client):
    """The UI expects our error codes, not FastAPI's generic validation error."""
    resp = client.post("/api/flights/query", json={})
    assert resp.status_code == 400
    assert resp.json()["code"] == "INVALID_AIRPORT"


def test_query_rate_limited_is_429(client, fetcher):
    fetcher.fetch_schedule.side_effect = UpstreamRateLimitError("FlightAPI rate limit exceeded.")
    resp = client.post("/api/flights/query", json={"airport": "CDG", "question": "What arrives today?"})
    assert resp.status_code == 429
    assert resp.json()["code"] == "RATE_LIMIT_EXCEEDED"


def test_build_orchestrator_wires_config_structs():
    """The lifespan builds every component from the settings' config structs."""
    from flight_assistant.config import Settings
    from flight_assistant.main import build_orchestrator

    app_settings = Settings(
        flight_api_key="flight-key", openrouter_api_key="llm-key", llm_model_label="Test Model",
    )
    with patch("flight_assistant.main.ScheduleFetcher") as fetcher_cls, \
         patch("flight_assistant.main.get_classification_llm") as classification_llm, \
         patch("flight_assistant.main.get_answer_llm") as answer_llm:
        orchestrator = build_orchestrator(app_settings)

    fetcher_config = fetcher_cls.call_args[0][0]
    assert fetcher_config.api_key == "flight-key"
    assert fetcher_config.timeout == 30.0
    assert classification_llm.call_args[0][0].api_key == "llm-key"
    assert answer_llm.call_args[0][0].timeout == 60.0
    assert orchestrator._model_label == "Test Model"
