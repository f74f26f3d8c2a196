"""
State that flows between the nodes of the query graph.

Each node fills in one more key: classify → analysis, fetch → schedule,
aggregate → aggregated, generate → answer. Which keys are present when the
graph finishes tells the orchestrator whether the request was answered or
skipped.
"""
from typing_extensions import TypedDict

from flight_assistant.models.schedule import (
    AggregatedSchedule,
    ModeAnalysis,
    ScheduleResult,
)


class QueryState(TypedDict, total=False):
    # Validated request inputs
    airport: str
    question: str
    day: int

    analysis: ModeAnalysis
    schedule: ScheduleResult
    aggregated: AggregatedSchedule
    answer: str
