"""
Turns flat FlightAPI flight lists into per-country and per-city groupings.

Everything here is pure: same input, same output, no I/O. Groups are plain
dicts, so their order is the order each country/city first shows up in the
source list. Records with holes in them are never dropped; FlightRecord fills
in "Unknown Country" / "Unknown City" / "Unknown Airline" instead, which keeps
group sizes summing to the input length.
"""
import logging

from flight_assistant.models.query import CountryCount, DirectionSummary
from flight_assistant.models.schedule import (
    AggregatedSchedule,
    DirectionAggregate,
    Direction,
    FlightDetail,
    FlightRecord,
    ScheduleResult,
    ScheduleSummary,
)

logger = logging.getLogger("flight-assistant.aggregator")


def aggregate(flights: list, direction: Direction) -> DirectionAggregate:
    """Group one direction's flights by counterpart country and city."""
    direction = Direction(direction)
    by_country: dict[str, list[FlightDetail]] = {}
    by_city: dict[str, list[FlightDetail]] = {}
    airlines: dict[str, None] = {}  # insertion-ordered set

    for raw in flights:
        record = FlightRecord(raw)
        country = record.country(direction)
        city = record.city(direction)
        airline = record.airline()

        common = {
            "airline": airline,
            "flight_number": record.flight_number(),
            "scheduled_time": record.scheduled_time(direction),
            "actual_time": record.actual_time(direction),
            "status": record.status(),
            "aircraft": record.aircraft(),
        }
        by_country.setdefault(country, []).append(FlightDetail(city=city, **common))
        by_city.setdefault(city, []).append(FlightDetail(country=country, **common))
        airlines[airline] = None

    return DirectionAggregate(
        by_country=by_country,
        by_city=by_city,
        airlines=list(airlines),
        total=len(flights),
    )


def aggregate_schedule(schedule: ScheduleResult) -> AggregatedSchedule:
    """Aggregate both directions of a fetch and compute the summary counts."""
    arrivals = aggregate(schedule.arrivals, Direction.ARRIVALS)
    departures = aggregate(schedule.departures, Direction.DEPARTURES)

    summary = ScheduleSummary(
        total_arrivals=arrivals.total,
        total_departures=departures.total,
        arrival_countries=len(arrivals.by_country),
        departure_countries=len(departures.by_country),
        arrival_cities=len(arrivals.by_city),
        departure_cities=len(departures.by_city),
        unique_airlines=len(set(arrivals.airlines) | set(departures.airlines)),
    )
    logger.debug(
        "Aggregated %s: %d arrivals in %d countries, %d departures in %d countries",
        schedule.airport, arrivals.total, summary.arrival_countries,
        departures.total, summary.departure_countries,
    )
    return AggregatedSchedule(
        airport=schedule.airport,
        day_param=schedule.day_param,
        day_label=schedule.day_label,
        summary=summary,
        arrivals=arrivals,
        departures=departures,
        raw_result=schedule.raw_result,
        metadata=schedule.metadata,
    )


def top_countries(agg: DirectionAggregate, limit: int = 10) -> list[tuple[str, int]]:
    """Countries by descending flight count. Ties keep first-seen order."""
    counts = [(country, len(flights)) for country, flights in agg.by_country.items()]
    return sorted(counts, key=lambda item: item[1], reverse=True)[:limit]


def summarize_direction(agg: DirectionAggregate, limit: int = 10) -> DirectionSummary:
    return DirectionSummary(
        total=agg.total,
        top_countries=[CountryCount(country=c, count=n) for c, n in top_countries(agg, limit)],
        top_airlines=agg.airlines[:limit],
    )
