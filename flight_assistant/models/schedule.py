"""
Value types for one trip through the pipeline: the schedule query, FlightAPI's
raw entries, the aggregated view of them, and the classifier's verdict.

FlightAPI responses are deeply nested and any level can be missing or null.
Rather than sprinkle `.get()` chains through the aggregation code, FlightRecord
wraps a raw entry and exposes a handful of named accessors. That is the only
place that decides what "missing" looks like, and it never raises.
"""
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UNKNOWN_COUNTRY = "Unknown Country"
UNKNOWN_CITY = "Unknown City"
UNKNOWN_AIRLINE = "Unknown Airline"


class Direction(str, Enum):
    ARRIVALS = "arrivals"
    DEPARTURES = "departures"


class Mode(str, Enum):
    ARRIVALS = "arrivals"
    DEPARTURES = "departures"
    BOTH = "both"
    NONE = "none"

    def directions(self) -> list[Direction]:
        """Which schedule facets this mode asks FlightAPI for."""
        if self is Mode.BOTH:
            return [Direction.ARRIVALS, Direction.DEPARTURES]
        if self is Mode.ARRIVALS:
            return [Direction.ARRIVALS]
        if self is Mode.DEPARTURES:
            return [Direction.DEPARTURES]
        return []


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CamelModel(BaseModel):
    """Snake_case in Python, camelCase on the wire (what the UI expects)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def dig(obj: Any, *path: str) -> Any:
    """Walk nested dicts, returning None as soon as a step is missing."""
    for key in path:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _text(*values: Any) -> str | None:
    """First non-empty scalar among `values`, as a string."""
    for value in values:
        if value in (None, "") or isinstance(value, (dict, list)):
            continue
        return str(value)
    return None


# ─────────────────────────────────────────────────────────────
# Raw FlightAPI entry
# ─────────────────────────────────────────────────────────────

class FlightRecord:
    """Read-only view over one entry of FlightAPI's schedule `data` array.

    For arrivals the interesting counterpart airport is the origin, for
    departures it's the destination. Times follow the same rule: an arrival
    reports when it left its origin, a departure when it lands at its
    destination.
    """

    __slots__ = ("_flight",)

    def __init__(self, raw: Any):
        flight = dig(raw, "flight")
        self._flight = flight if isinstance(flight, dict) else {}

    def counterpart_airport(self, direction: Direction) -> dict | None:
        side = "origin" if direction is Direction.ARRIVALS else "destination"
        airport = dig(self._flight, "airport", side)
        return airport if isinstance(airport, dict) else None

    def country(self, direction: Direction) -> str:
        airport = self.counterpart_airport(direction)
        return _text(
            dig(airport, "position", "country", "name"),
            dig(airport, "position", "country", "code"),
        ) or UNKNOWN_COUNTRY

    def city(self, direction: Direction) -> str:
        airport = self.counterpart_airport(direction)
        return _text(dig(airport, "name"), dig(airport, "code", "iata")) or UNKNOWN_CITY

    def airline(self) -> str:
        return _text(
            dig(self._flight, "airline", "name"),
            dig(self._flight, "airline", "code", "iata"),
        ) or UNKNOWN_AIRLINE

    def flight_number(self) -> str | None:
        return _text(
            dig(self._flight, "identification", "number", "default"),
            dig(self._flight, "identification", "callsign"),
        )

    def _time_field(self, direction: Direction) -> str:
        return "departure" if direction is Direction.ARRIVALS else "arrival"

    def scheduled_time(self, direction: Direction) -> Any:
        return dig(self._flight, "time", "scheduled", self._time_field(direction))

    def actual_time(self, direction: Direction) -> Any:
        return dig(self._flight, "time", "real", self._time_field(direction))

    def status(self) -> str | None:
        return _text(dig(self._flight, "status", "text"))

    def aircraft(self) -> str | None:
        return _text(
            dig(self._flight, "aircraft", "model", "text"),
            dig(self._flight, "aircraft", "registration"),
        )


def extract_flights(payload: Any, direction: Direction) -> list:
    """Pull the flight array out of a FlightAPI schedule payload.

    The array lives at airport.pluginData.schedule.<direction>.data. If any
    step of that path is missing we treat it as "no flights", not an error.
    """
    data = dig(payload, "airport", "pluginData", "schedule", direction.value, "data")
    return data if isinstance(data, list) else []


# ─────────────────────────────────────────────────────────────
# Fetch + aggregation results
# ─────────────────────────────────────────────────────────────

class ScheduleQuery(CamelModel):
    airport: str
    day: int = 1
    mode: Mode = Mode.BOTH


class FetchMetadata(CamelModel):
    total_arrivals: int
    total_departures: int
    fetched_at: str
    api_endpoint: str = "FlightAPI.io /schedule"
    parameters: dict[str, Any] = {}


class ScheduleResult(CamelModel):
    """What the fetcher hands back: flat lists plus the untouched payloads."""
    airport: str
    day_param: int
    day_label: str
    arrivals: list = []
    departures: list = []
    # Keyed by direction; only the directions we actually asked for are present
    raw_result: dict[str, Any] = {}
    metadata: FetchMetadata | None = None


class FlightDetail(CamelModel):
    # Exactly one of city/country is set: whichever isn't the group key
    city: str | None = None
    country: str | None = None
    airline: str
    flight_number: str | None = None
    scheduled_time: Any = None
    actual_time: Any = None
    status: str | None = None
    aircraft: str | None = None


class DirectionAggregate(CamelModel):
    by_country: dict[str, list[FlightDetail]] = {}
    by_city: dict[str, list[FlightDetail]] = {}
    # Distinct airline names in first-seen order
    airlines: list[str] = []
    total: int = 0


class ScheduleSummary(CamelModel):
    total_arrivals: int
    total_departures: int
    arrival_countries: int
    departure_countries: int
    arrival_cities: int
    departure_cities: int
    unique_airlines: int


class AggregatedSchedule(CamelModel):
    airport: str
    day_param: int
    day_label: str
    summary: ScheduleSummary
    arrivals: DirectionAggregate
    departures: DirectionAggregate
    raw_result: dict[str, Any] = {}
    metadata: FetchMetadata | None = None


# ─────────────────────────────────────────────────────────────
# Classifier output
# ─────────────────────────────────────────────────────────────

class ModeAnalysis(CamelModel):
    # None means "couldn't tell" (classifier error); only False skips the fetch
    relevant: bool | None = True
    mode: Mode = Mode.BOTH
    reasoning: str = ""
    confidence: Confidence = Confidence.MEDIUM
    should_skip_api: bool = Field(default=False, alias="shouldSkipAPI")
