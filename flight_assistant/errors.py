"""
Error taxonomy for the query pipeline.

Each error knows its HTTP status and the machine-readable code the UI switches
on, so the router never has to sniff exception messages. Upstream errors also
remember which service failed: a bad FlightAPI key and a bad LLM key are both
502s, but the client gets a different code for each.
"""

FLIGHT_API = "flight_api"
LLM = "llm"


class FlightAssistantError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, *, code: str | None = None, extra: dict | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        # Additional fields merged into the error payload (e.g. supportedAirports)
        self.extra = extra or {}


class ValidationError(FlightAssistantError):
    """Client input rejected before any network call."""
    status_code = 400
    code = "INVALID_REQUEST"


class UpstreamError(FlightAssistantError):
    """Any other failure talking to an upstream service."""
    status_code = 502

    def __init__(self, message: str, *, service: str = FLIGHT_API, code: str | None = None, extra: dict | None = None):
        self.service = service
        super().__init__(message, code=code or self._default_code(service), extra=extra)

    def _default_code(self, service: str) -> str:
        return "LLM_API_ERROR" if service == LLM else "FLIGHT_API_ERROR"


class UpstreamAuthError(UpstreamError):
    """Upstream rejected our credentials (401/403)."""


class QuotaExceededError(UpstreamError):
    """LLM account is out of credits (402)."""


class UpstreamRateLimitError(UpstreamError):
    status_code = 429

    def _default_code(self, service: str) -> str:
        return "RATE_LIMIT_EXCEEDED"


class RequestTimeoutError(UpstreamError):
    status_code = 504

    def _default_code(self, service: str) -> str:
        return "REQUEST_TIMEOUT"


class NotFoundError(FlightAssistantError):
    status_code = 404
    code = "NO_FLIGHT_DATA"


class GenerationError(FlightAssistantError):
    """LLM call succeeded but produced no text."""


class InternalError(FlightAssistantError):
    pass
