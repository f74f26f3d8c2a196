"""
Prompts for the two LLM calls.

CLASSIFICATION_PROMPT asks for a tiny JSON verdict: is this about aviation at
all, and if so which FlightAPI mode would answer it. SUPPORT_SYSTEM_PROMPT sets
the persona for the final answer, and build_answer_prompt packs everything we
know about the airport (raw payload included) into the user message.
"""
import json

from flight_assistant.airports import airport_name
from flight_assistant.models.schedule import AggregatedSchedule, Mode, ModeAnalysis, dig
from flight_assistant.services.aggregator import top_countries

CLASSIFICATION_PROMPT = """You are a FlightAPI.io integration specialist. Analyze this question to determine if it's aviation-related and what API mode to use.

QUESTION: "{question}"
AIRPORT: {airport}

STEP 1 - RELEVANCE CHECK:
First, determine if this question is related to aviation/airports/flights/travel. Valid topics include:
- Flight schedules (arrivals/departures)
- Airport information (location, website, facilities, coordinates, timezone)
- Airlines and aircraft
- Travel and aviation topics
- Airport reviews and ratings
- Airport services and amenities

INVALID topics (return relevant: false):
- Weather (unless specifically about airport weather)
- Politics, cooking, sports, entertainment
- General knowledge unrelated to aviation
- Personal questions not about travel
- Technical questions unrelated to airports/flights

STEP 2 - MODE DETERMINATION (only if relevant):
If the question IS aviation-related, determine the FlightAPI mode:
- "arrivals": For flights coming TO this airport (from other places)
- "departures": For flights leaving FROM this airport (to other places)
- "both": For general airport info, ratings, or questions requiring both datasets

Examples:
- "How many flights from Germany?" → "arrivals"
- "Which cities does BA fly to?" → "departures"
- "What is the airport website?" → "both"
- "What are the coordinates?" → "both"
- "What's the airport rating?" → "both"
- "What's the weather like?" → relevant: false

RESPONSE FORMAT:
If NOT aviation-related:
{{
  "relevant": false,
  "mode": "none",
  "reasoning": "Question is not related to aviation or airport topics",
  "confidence": "high"
}}

If aviation-related:
{{
  "relevant": true,
  "mode": "arrivals" or "departures" or "both",
  "reasoning": "Brief explanation of why this mode was chosen",
  "confidence": "high" or "medium" or "low"
}}"""


SUPPORT_SYSTEM_PROMPT = """You are a friendly and professional AI support manager for Flight Assistant AI. Your role is to help users understand flight data in a conversational, human-like way.

## Your Personality
- Friendly, helpful, and professional
- Knowledgeable about aviation and travel
- Patient and clear in explanations
- Use natural, conversational language

## Response Style
- Start with a friendly acknowledgment of their question
- Provide clear, specific answers based on the flight data
- Use conversational phrases like "I can see that...", "Looking at the data...", "Here's what I found..."
- Include relevant numbers and statistics naturally in conversation
- End with helpful context or additional insights
- Answer should not be ended with a question.

## Data Presentation
- Present numbers in an easy-to-understand way
- Use comparisons and context to make data meaningful
- Mention the time period and data source naturally
- Be specific about what the data shows and any limitations

## Flight data
- If the user asks about specific flights, use the raw FlightAPI response and list the details: flight number, airline, departure time, arrival time, status.

## Professional Standards
- Stay accurate to the provided flight data
- Acknowledge when information isn't available
- Use proper airport codes and airline names
- Maintain a helpful, service-oriented tone

Remember: You're a support manager helping a customer understand flight information. Be human, helpful, and informative."""


def build_classification_prompt(question: str, airport: str) -> str:
    return CLASSIFICATION_PROMPT.format(question=question, airport=airport)


def _airport_payload(raw_result: dict) -> dict | None:
    """Airport block from whichever direction we fetched (arrivals first)."""
    return dig(raw_result, "arrivals", "airport") or dig(raw_result, "departures", "airport")


def _details_section(details: dict) -> str:
    homepage = dig(details, "url", "homepage") or "Not available"
    wikipedia = dig(details, "url", "wikipedia") or "Not available"
    return f"""
- Name: {details.get("name")}
- IATA/ICAO: {dig(details, "code", "iata")}/{dig(details, "code", "icao")}
- Location: {dig(details, "position", "region", "city")}, {dig(details, "position", "country", "name")}
- Coordinates: {dig(details, "position", "latitude")}, {dig(details, "position", "longitude")}
- Elevation: {dig(details, "position", "elevation")}m
- Timezone: {dig(details, "timezone", "name")} ({dig(details, "timezone", "abbr")})
- Official Website: {homepage}
- Wikipedia: {wikipedia}"""


def _reviews_section(diary: dict) -> str:
    section = f"""

AIRPORT REVIEWS & RATINGS:
- Average Rating: {dig(diary, "ratings", "avg")}/5 ({dig(diary, "ratings", "total")} reviews)
- Total Reviews: {diary.get("reviews")}
- Evaluation Score: {diary.get("evaluation")}%"""
    comments = diary.get("comment")
    if isinstance(comments, list) and comments:
        latest = comments[0] if isinstance(comments[0], dict) else {}
        content = str(latest.get("content") or "")[:200]
        section += f'\n- Recent Review: "{content}..." - {dig(latest, "author", "name")}'
    return section


def build_answer_prompt(
    question: str,
    schedule: AggregatedSchedule,
    airport: str,
    mode: Mode,
    analysis: ModeAnalysis,
    top_n: int = 8,
) -> str:
    """Build the data-bearing user message for the final answer."""
    prompt = f"""CUSTOMER SUPPORT REQUEST

Customer Question: "{question}"
Airport: {airport} ({airport_name(airport)})
Time Period: {schedule.day_label}
FlightAPI Mode: {Mode(mode).value} ({analysis.reasoning})

Raw FlightAPI Response: {json.dumps(schedule.raw_result, indent=2, ensure_ascii=False, default=str)}

COMPLETE FLIGHTAPI DATASET:
You have access to the complete FlightAPI.io response which includes:

AIRPORT DETAILS:"""

    airport_block = _airport_payload(schedule.raw_result)
    details = dig(airport_block, "pluginData", "details")
    if isinstance(details, dict):
        prompt += _details_section(details)

    diary = dig(airport_block, "pluginData", "flightdiary")
    if isinstance(diary, dict):
        prompt += _reviews_section(diary)

    summary = schedule.summary
    prompt += f"""

FLIGHT SCHEDULE SUMMARY:
- Total arrivals: {summary.total_arrivals}
- Total departures: {summary.total_departures}
- Countries with arriving flights: {summary.arrival_countries}
- Countries with departing flights: {summary.departure_countries}
- Unique airlines: {summary.unique_airlines}"""

    for title, agg in (("ARRIVAL", schedule.arrivals), ("DEPARTURE", schedule.departures)):
        if agg.total > 0:
            prompt += f"\n\nTOP {title} COUNTRIES:"
            for country, count in top_countries(agg, top_n):
                prompt += f"\n- {country}: {count} flights"

    for title, agg in (("Arrivals", schedule.arrivals), ("Departures", schedule.departures)):
        if agg.airlines:
            prompt += f"\n\nTOP AIRLINES ({title}): {', '.join(agg.airlines[:top_n])}"

    prompt += f"""

INSTRUCTIONS:
Answer the customer's question using ANY relevant information from this complete dataset. The question can be about:
- Flight schedules (arrivals/departures)
- Airport information (location, website, timezone)
- Airlines and routes
- Countries and cities
- Airport facilities and reviews
- Any other data available in the FlightAPI response

Be conversational, helpful, and specific. Use the exact data provided. If the question asks for information not in the dataset, clearly state what information IS available.

CUSTOMER QUESTION: "{question}"

Please provide a friendly, helpful response as an AI support manager."""
    return prompt
