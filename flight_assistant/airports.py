"""
The fixed set of airports the assistant knows about, plus the day selector.

FlightAPI accepts any IATA code, but the UI and the prompts are tuned for these
six hubs, so anything else is rejected at validation time.
"""

SUPPORTED_AIRPORTS = [
    {"code": "DXB", "name": "Dubai International Airport", "city": "Dubai", "country": "UAE"},
    {"code": "LHR", "name": "London Heathrow Airport", "city": "London", "country": "UK"},
    {"code": "CDG", "name": "Charles de Gaulle Airport (Paris)", "city": "Paris", "country": "France"},
    {"code": "SIN", "name": "Singapore Changi Airport", "city": "Singapore", "country": "Singapore"},
    {"code": "HKG", "name": "Hong Kong International Airport", "city": "Hong Kong", "country": "Hong Kong"},
    {"code": "AMS", "name": "Amsterdam Airport Schiphol", "city": "Amsterdam", "country": "Netherlands"},
]

SUPPORTED_CODES = [a["code"] for a in SUPPORTED_AIRPORTS]

_NAMES = {a["code"]: a["name"] for a in SUPPORTED_AIRPORTS}

# FlightAPI's relative day parameter
DAY_LABELS = {-1: "Yesterday", 1: "Today", 2: "Tomorrow"}
DEFAULT_DAY = 1


def is_supported(airport_code) -> bool:
    if not isinstance(airport_code, str):
        return False
    return airport_code.strip().upper() in _NAMES


def airport_name(airport_code: str | None) -> str:
    if not airport_code:
        return "Unknown Airport"
    return _NAMES.get(airport_code.strip().upper(), "Unknown Airport")


def day_label(day) -> str:
    """Human label for a day selector; anything unrecognized reads as Today."""
    try:
        value = float(day)
    except (TypeError, ValueError):
        return "Today"
    if not value.is_integer():
        return "Today"
    return DAY_LABELS.get(int(value), "Today")
