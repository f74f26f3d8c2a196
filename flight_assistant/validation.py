"""
Request validation and sanitization for POST /api/flights/query.

Runs before anything touches the network. Each failure maps to one of the
error codes the UI knows how to display.
"""
import re

from flight_assistant.airports import DAY_LABELS, DEFAULT_DAY, SUPPORTED_CODES, is_supported
from flight_assistant.errors import ValidationError

MIN_QUESTION_LENGTH = 5
MAX_QUESTION_LENGTH = 500

QUESTION_WORDS = ["how", "what", "where", "when", "why", "which", "who", "many", "much"]

_DISALLOWED_CHARS = re.compile(r"[^\w\s?!.,\-()]")
_WHITESPACE = re.compile(r"\s+")


def is_valid_question(question) -> bool:
    """5-500 characters, and it has to at least look like a question."""
    if not isinstance(question, str):
        return False
    trimmed = question.strip()
    if not MIN_QUESTION_LENGTH <= len(trimmed) <= MAX_QUESTION_LENGTH:
        return False
    lowered = trimmed.lower()
    return "?" in trimmed or any(word in lowered for word in QUESTION_WORDS)


def sanitize_question(question: str) -> str:
    if not isinstance(question, str):
        return ""
    cleaned = _WHITESPACE.sub(" ", question.strip())
    cleaned = _DISALLOWED_CHARS.sub("", cleaned)
    return cleaned[:MAX_QUESTION_LENGTH]


def parse_day(date) -> int:
    """Accept -1/1/2 (or their string forms); absent means today."""
    if date is None:
        return DEFAULT_DAY
    if isinstance(date, bool):
        raise ValidationError(
            "Date parameter must be -1 (yesterday), 1 (today), or 2 (tomorrow)",
            code="INVALID_DAY_PARAMETER",
        )
    try:
        value = float(date)
    except (TypeError, ValueError):
        value = None
    if value is None or not value.is_integer() or int(value) not in DAY_LABELS:
        raise ValidationError(
            "Date parameter must be -1 (yesterday), 1 (today), or 2 (tomorrow)",
            code="INVALID_DAY_PARAMETER",
        )
    return int(value)


def validate_query(airport, question, date) -> tuple[str, str, int]:
    """Check and normalize the raw request fields.

    Returns (airport_code, sanitized_question, day). Raises ValidationError.
    """
    if not airport or not isinstance(airport, str):
        raise ValidationError(
            "Airport code is required and must be a string", code="INVALID_AIRPORT"
        )
    if not is_supported(airport):
        raise ValidationError(
            f"Invalid airport code. Supported airports: {', '.join(SUPPORTED_CODES)}",
            code="UNSUPPORTED_AIRPORT",
            extra={"supportedAirports": SUPPORTED_CODES},
        )

    if not question or not isinstance(question, str):
        raise ValidationError(
            "Question is required and must be a string", code="INVALID_QUESTION"
        )
    if not is_valid_question(question):
        raise ValidationError(
            "Please provide a valid question (minimum 5 characters, should be flight-related)",
            code="INVALID_QUESTION_FORMAT",
        )

    day = parse_day(date)
    return airport.strip().upper(), sanitize_question(question), day
