"""
FlightAPI.io schedule client.

One GET /schedule/{key} per direction. When the classifier asks for both
directions the two calls are independent, so they go out together with
asyncio.gather. Nothing is retried here: a throttled or failing upstream is
reported once and the orchestrator turns it into the right HTTP status.
"""
import asyncio
import logging
from datetime import datetime, timezone

import httpx

from flight_assistant.airports import DEFAULT_DAY, day_label
from flight_assistant.config import ScheduleApiConfig
from flight_assistant.errors import (
    FLIGHT_API,
    NotFoundError,
    RequestTimeoutError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamRateLimitError,
)
from flight_assistant.models.schedule import (
    Direction,
    FetchMetadata,
    Mode,
    ScheduleQuery,
    ScheduleResult,
    extract_flights,
)

logger = logging.getLogger("flight-assistant.schedule")


def _normalize_day(day) -> int:
    """FlightAPI's `day` param; anything falsy or non-numeric means today."""
    try:
        return int(day) or DEFAULT_DAY
    except (TypeError, ValueError):
        return DEFAULT_DAY


class ScheduleFetcher:
    """Thin async wrapper around FlightAPI's ``/schedule`` endpoint."""

    def __init__(self, config: ScheduleApiConfig, client: httpx.AsyncClient | None = None):
        self._config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.base_url,
            headers={"User-Agent": config.user_agent},
            timeout=httpx.Timeout(config.timeout),
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def _get_direction(self, airport: str, day: int, direction: Direction) -> dict:
        params = {"mode": direction.value, "iata": airport, "day": day}
        logger.info("FlightAPI request: %s %s day=%s", direction.value, airport, day)
        try:
            resp = await self._client.get(f"/schedule/{self._config.api_key}", params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            raise self._map_status_error(exc, airport) from exc
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                "FlightAPI request timeout. Please try again.", service=FLIGHT_API
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError: a 200 whose body is not JSON (gateway pages, empty bodies)
            raise UpstreamError(
                f"Failed to fetch flight data: {exc}", service=FLIGHT_API
            ) from exc

        logger.info("FlightAPI response: %s %s", resp.status_code, direction.value)
        return payload

    @staticmethod
    def _map_status_error(exc: httpx.HTTPStatusError, airport: str) -> Exception:
        status = exc.response.status_code
        logger.error("FlightAPI error: status=%s url=%s", status, exc.request.url.path)
        if status in (401, 403):
            return UpstreamAuthError(
                "Invalid FlightAPI key. Please check your API configuration.",
                service=FLIGHT_API,
            )
        if status == 429:
            return UpstreamRateLimitError(
                "FlightAPI rate limit exceeded. Please try again later.",
                service=FLIGHT_API,
            )
        if status == 404:
            return NotFoundError(f"Airport {airport} not found or no data available.")
        return UpstreamError(f"Failed to fetch flight data: {exc}", service=FLIGHT_API)

    async def fetch_schedule(self, airport_code: str, day=DEFAULT_DAY, mode: Mode = Mode.BOTH) -> ScheduleResult:
        """Fetch arrivals and/or departures for one airport and day.

        Returns both the flattened flight lists and the untouched payloads,
        which the answer prompt embeds verbatim.
        """
        query = ScheduleQuery(airport=airport_code.upper(), day=_normalize_day(day), mode=mode)
        airport, day, mode = query.airport, query.day, query.mode
        directions = mode.directions()
        logger.info("Fetching flight data for %s (day: %s, mode: %s)", airport, day, mode.value)

        tasks = [asyncio.create_task(self._get_direction(airport, day, d)) for d in directions]
        try:
            payloads = await asyncio.gather(*tasks)
        except BaseException:
            # One direction failed: don't leave the other request running
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        raw_result = {d.value: payload for d, payload in zip(directions, payloads)}

        arrivals = extract_flights(raw_result.get(Direction.ARRIVALS.value), Direction.ARRIVALS)
        departures = extract_flights(raw_result.get(Direction.DEPARTURES.value), Direction.DEPARTURES)
        label = day_label(day)

        logger.info(
            "Retrieved %d arrivals and %d departures for %s (%s)",
            len(arrivals), len(departures), airport, label,
        )
        return ScheduleResult(
            airport=airport,
            day_param=day,
            day_label=label,
            arrivals=arrivals,
            departures=departures,
            raw_result=raw_result,
            metadata=FetchMetadata(
                total_arrivals=len(arrivals),
                total_departures=len(departures),
                fetched_at=datetime.now(timezone.utc).isoformat(),
                parameters={"mode": mode.value, "iata": airport, "day": day},
            ),
        )
