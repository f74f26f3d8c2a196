"""
Tests for the answer prompt and generator.

Prompt tests check that the data the LLM needs actually makes it into the
message; generator tests check message roles and error translation.
"""
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from flight_assistant.agent.answer import AnswerGenerator
from flight_assistant.agent.prompts import SUPPORT_SYSTEM_PROMPT, build_answer_prompt
from flight_assistant.errors import (
    GenerationError,
    QuotaExceededError,
    RequestTimeoutError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamRateLimitError,
)
from flight_assistant.models.schedule import Mode
from flight_assistant.services.aggregator import aggregate_schedule

from conftest import make_payload

_REQUEST = httpx.Request("POST", "https://openrouter.test/api/v1/chat/completions")

DETAILS = {
    "name": "Dubai International Airport",
    "code": {"iata": "DXB", "icao": "OMDB"},
    "position": {
        "latitude": 25.25, "longitude": 55.36, "elevation": 19,
        "country": {"name": "United Arab Emirates"}, "region": {"city": "Dubai"},
    },
    "timezone": {"name": "Asia/Dubai", "abbr": "GST"},
    "url": {"homepage": "https://www.dubaiairports.ae", "wikipedia": None},
}

DIARY = {
    "ratings": {"avg": 4, "total": 1200},
    "reviews": 900,
    "evaluation": 87,
    "comment": [{"content": "x" * 300, "author": {"name": "Sam"}}],
}


def _status_error(cls, status):
    return cls("boom", response=httpx.Response(status, request=_REQUEST), body=None)


def test_prompt_contains_summary_and_breakdowns(schedule_result, relevant_analysis):
    agg = aggregate_schedule(schedule_result)
    prompt = build_answer_prompt("How many flights today?", agg, "DXB", Mode.BOTH, relevant_analysis)

    assert 'Customer Question: "How many flights today?"' in prompt
    assert "Airport: DXB (Dubai International Airport)" in prompt
    assert "Time Period: Today" in prompt
    assert "- Total arrivals: 4" in prompt
    assert "- Unique airlines: 3" in prompt
    assert "TOP ARRIVAL COUNTRIES:\n- Germany: 3 flights\n- United Kingdom: 1 flights" in prompt
    assert "TOP AIRLINES (Departures): Emirates, British Airways" in prompt
    # Raw payload goes in verbatim
    assert '"LH630"' in prompt


def test_prompt_includes_airport_details_and_reviews(schedule_result, relevant_analysis):
    schedule_result.raw_result["arrivals"] = make_payload(
        "arrivals", schedule_result.arrivals, details=DETAILS, flightdiary=DIARY,
    )
    agg = aggregate_schedule(schedule_result)
    prompt = build_answer_prompt("What's the rating?", agg, "DXB", Mode.BOTH, relevant_analysis)

    assert "- IATA/ICAO: DXB/OMDB" in prompt
    assert "- Coordinates: 25.25, 55.36" in prompt
    assert "- Timezone: Asia/Dubai (GST)" in prompt
    assert "- Official Website: https://www.dubaiairports.ae" in prompt
    assert "- Wikipedia: Not available" in prompt
    assert "- Average Rating: 4/5 (1200 reviews)" in prompt
    assert '- Recent Review: "' + "x" * 200 + '..." - Sam' in prompt


def test_prompt_skips_sections_without_data(schedule_result, relevant_analysis):
    schedule_result.departures = []
    schedule_result.raw_result.pop("departures")
    agg = aggregate_schedule(schedule_result)
    prompt = build_answer_prompt("Any arrivals?", agg, "DXB", Mode.ARRIVALS, relevant_analysis)

    assert "TOP DEPARTURE COUNTRIES" not in prompt
    assert "TOP AIRLINES (Departures)" not in prompt
    assert "AIRPORT REVIEWS" not in prompt


async def test_generate_answer_sends_system_and_user_messages(schedule_result, relevant_analysis):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content="  Here's what I found: 7 flights.  "))
    generator = AnswerGenerator(llm)

    answer = await generator.generate_answer(
        "How many flights?", aggregate_schedule(schedule_result), "DXB", Mode.BOTH, relevant_analysis,
    )

    assert answer == "Here's what I found: 7 flights."
    messages = llm.ainvoke.call_args[0][0]
    assert isinstance(messages[0], SystemMessage)
    assert messages[0].content == SUPPORT_SYSTEM_PROMPT
    assert isinstance(messages[1], HumanMessage)
    assert "How many flights?" in messages[1].content


async def test_empty_answer_is_generation_error(schedule_result, relevant_analysis):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=AIMessage(content="   "))
    with pytest.raises(GenerationError):
        await AnswerGenerator(llm).generate_answer(
            "Q?", aggregate_schedule(schedule_result), "DXB", Mode.BOTH, relevant_analysis,
        )


@pytest.mark.parametrize("exc,expected,code", [
    (_status_error(openai.AuthenticationError, 401), UpstreamAuthError, "LLM_API_ERROR"),
    (_status_error(openai.RateLimitError, 429), UpstreamRateLimitError, "RATE_LIMIT_EXCEEDED"),
    (_status_error(openai.APIStatusError, 402), QuotaExceededError, "LLM_API_ERROR"),
    (openai.APITimeoutError(request=_REQUEST), RequestTimeoutError, "REQUEST_TIMEOUT"),
    (openai.APIConnectionError(request=_REQUEST), UpstreamError, "LLM_API_ERROR"),
    (_status_error(openai.InternalServerError, 500), UpstreamError, "LLM_API_ERROR"),
])
async def test_llm_errors_are_translated(exc, expected, code, schedule_result, relevant_analysis):
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=exc)
    with pytest.raises(expected) as exc_info:
        await AnswerGenerator(llm).generate_answer(
            "Q?", aggregate_schedule(schedule_result), "DXB", Mode.BOTH, relevant_analysis,
        )
    assert exc_info.value.code == code
    assert exc_info.value.service == "llm"
