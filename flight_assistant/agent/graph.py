"""
LangGraph query pipeline: sequences the whole request.

Architecture:
    [classify] → irrelevant? → Yes → [END]                       (Skipped)
                             → No  → [fetch] → [aggregate] → [generate] → [END]  (Answered)

Validation happens before the graph runs and response assembly after it.
Any exception raised inside a node propagates out of ainvoke; the orchestrator
maps it to an error payload (Failed). Every response, whatever the outcome,
carries the elapsed time.

The graph is compiled once per orchestrator, and the orchestrator itself is
built once in the app lifespan with its collaborators passed in.
"""
import logging
import time
from datetime import datetime, timezone

from langgraph.graph import END, StateGraph

from flight_assistant.agent.answer import AnswerGenerator
from flight_assistant.agent.classifier import ModeClassifier
from flight_assistant.agent.state import QueryState
from flight_assistant.airports import airport_name
from flight_assistant.errors import FlightAssistantError, InternalError, NotFoundError
from flight_assistant.models.query import (
    AnalysisOut,
    ErrorResponse,
    QueryData,
    QueryRequest,
    QueryResponse,
    ResponseMetadata,
)
from flight_assistant.services.aggregator import aggregate_schedule, summarize_direction
from flight_assistant.services.schedule import ScheduleFetcher
from flight_assistant.validation import validate_query

logger = logging.getLogger("flight-assistant.orchestrator")

FALLBACK_ANSWER = (
    "Sorry, I can't understand your question. Can you ask again? I'm designed to help "
    "with flight schedules, airport information, airlines, and other aviation-related topics."
)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def _elapsed(start: float) -> str:
    return f"{round((time.perf_counter() - start) * 1000)}ms"


class QueryOrchestrator:
    def __init__(
        self,
        fetcher: ScheduleFetcher,
        classifier: ModeClassifier,
        generator: AnswerGenerator,
        model_label: str = "Gemini Flash 1.5",
        summary_top_n: int = 10,
    ):
        self._fetcher = fetcher
        self._classifier = classifier
        self._generator = generator
        self._model_label = model_label
        self._summary_top_n = summary_top_n
        self._graph = self._build_graph().compile()

    async def close(self) -> None:
        await self._fetcher.close()

    # ─────────────────────────────────────────────────────────────
    # Graph
    # ─────────────────────────────────────────────────────────────

    def _build_graph(self) -> StateGraph:
        async def classify_node(state: QueryState) -> dict:
            analysis = await self._classifier.classify(state["question"], state["airport"])
            return {"analysis": analysis}

        def should_fetch(state: QueryState) -> str:
            analysis = state["analysis"]
            if analysis.should_skip_api or analysis.relevant is False:
                logger.info("Question not relevant to aviation, skipping FlightAPI call")
                return END
            return "fetch"

        async def fetch_node(state: QueryState) -> dict:
            schedule = await self._fetcher.fetch_schedule(
                state["airport"], state["day"], state["analysis"].mode
            )
            if not schedule.arrivals and not schedule.departures:
                raise NotFoundError(
                    f"No flight data available for {schedule.airport} ({schedule.day_label})",
                    extra={"dayParam": schedule.day_param, "dayLabel": schedule.day_label},
                )
            return {"schedule": schedule}

        def aggregate_node(state: QueryState) -> dict:
            return {"aggregated": aggregate_schedule(state["schedule"])}

        async def generate_node(state: QueryState) -> dict:
            analysis = state["analysis"]
            answer = await self._generator.generate_answer(
                state["question"], state["aggregated"], state["airport"], analysis.mode, analysis
            )
            return {"answer": answer}

        graph = StateGraph(QueryState)
        graph.add_node("classify", classify_node)
        graph.add_node("fetch", fetch_node)
        graph.add_node("aggregate", aggregate_node)
        graph.add_node("generate", generate_node)
        graph.set_entry_point("classify")
        graph.add_conditional_edges("classify", should_fetch, {"fetch": "fetch", END: END})
        graph.add_edge("fetch", "aggregate")
        graph.add_edge("aggregate", "generate")
        graph.add_edge("generate", END)
        return graph

    # ─────────────────────────────────────────────────────────────
    # Request handling
    # ─────────────────────────────────────────────────────────────

    async def run(self, request: QueryRequest) -> tuple[int, dict]:
        """Process one query. Returns (http_status, json_payload)."""
        start = time.perf_counter()
        airport, question = request.airport, request.question

        try:
            airport, question, day = validate_query(request.airport, request.question, request.date)
            logger.info('Processing query for %s: "%s"', airport, question)
            result = await self._graph.ainvoke(
                {"airport": airport, "question": question, "day": day}
            )
        except FlightAssistantError as exc:
            return self._error(exc, airport, question, start)
        except Exception as exc:
            logger.exception("Query pipeline error: %s", exc)
            return self._error(
                InternalError(f"Failed to process query: {exc}"), airport, question, start
            )

        if "answer" in result:
            payload = self._answered(result, start)
            body = payload.model_dump(by_alias=True, mode="json")
        else:
            payload = self._skipped(result, start)
            body = payload.model_dump(by_alias=True, mode="json", exclude={"data"})
        logger.info("Query completed in %s", payload.metadata.response_time)
        return 200, body

    def _skipped(self, state: dict, start: float) -> QueryResponse:
        analysis = state["analysis"]
        return QueryResponse(
            airport=state["airport"],
            airport_name=airport_name(state["airport"]),
            question=state["question"],
            answer=FALLBACK_ANSWER,
            analysis=AnalysisOut(
                mode=analysis.mode.value,
                reasoning=analysis.reasoning,
                confidence=analysis.confidence.value,
                relevant=False,
            ),
            metadata=ResponseMetadata(
                response_time=_elapsed(start),
                timestamp=_timestamp(),
                data_source="No API call made",
                ai_model=self._model_label,
                flight_api_called=False,
            ),
        )

    def _answered(self, state: dict, start: float) -> QueryResponse:
        analysis = state["analysis"]
        aggregated = state["aggregated"]
        n = self._summary_top_n
        return QueryResponse(
            airport=state["airport"],
            airport_name=airport_name(state["airport"]),
            question=state["question"],
            answer=state["answer"],
            analysis=AnalysisOut(
                mode=analysis.mode.value,
                reasoning=analysis.reasoning,
                confidence=analysis.confidence.value,
                relevant=analysis.relevant,
            ),
            data=QueryData(
                day_param=aggregated.day_param,
                day_label=aggregated.day_label,
                summary=aggregated.summary,
                arrivals=summarize_direction(aggregated.arrivals, n),
                departures=summarize_direction(aggregated.departures, n),
                raw_result=aggregated.raw_result,
            ),
            metadata=ResponseMetadata(
                response_time=_elapsed(start),
                timestamp=_timestamp(),
                data_source="FlightAPI.io",
                ai_model=self._model_label,
                flight_api_mode=analysis.mode.value,
                flight_api_called=True,
            ),
        )

    def _error(self, exc: FlightAssistantError, airport, question, start: float) -> tuple[int, dict]:
        response_time = _elapsed(start)
        if exc.status_code >= 500:
            logger.error("Query failed after %s: %s", response_time, exc.message)
        else:
            logger.warning("Query rejected after %s: [%s] %s", response_time, exc.code, exc.message)

        metadata = ResponseMetadata(response_time=response_time, timestamp=_timestamp())
        body = ErrorResponse(
            error=exc.message,
            code=exc.code,
            airport=airport,
            question=question,
            metadata=metadata,
        ).model_dump(by_alias=True, mode="json", exclude={"metadata"})
        # airport/question stay even when null; only metadata drops unset fields
        body["metadata"] = metadata.model_dump(by_alias=True, mode="json", exclude_none=True)
        body.update(exc.extra)
        return exc.status_code, body
