"""
Mode classifier: decides whether a question is about aviation and, if so,
which FlightAPI mode (arrivals / departures / both) can answer it.

Two-stage decode of the LLM reply:
1. pull the first balanced {...} block out of whatever prose surrounds it
2. parse it as JSON
If either stage fails we fall back to a keyword heuristic. If the LLM call
itself fails we return a low-confidence default and keep going: this step
must never take the whole request down.
"""
import json
import logging

from langchain_core.messages import HumanMessage

from flight_assistant.agent.prompts import build_classification_prompt
from flight_assistant.models.schedule import Confidence, Mode, ModeAnalysis

logger = logging.getLogger("flight-assistant.classifier")

AVIATION_KEYWORDS = [
    "flight", "airport", "airline", "plane", "aircraft",
    "departure", "arrival", "terminal", "gate", "runway",
    "fly",  # "which cities does BA fly to?" names no other keyword
]
DEPARTURE_KEYWORDS = ["fly to", "go to", "destination", "departing", "leaving"]
ARRIVAL_KEYWORDS = ["from", "arriving"]

_FETCHABLE = {Mode.ARRIVALS, Mode.DEPARTURES, Mode.BOTH}


def _as_bool(value):
    """True/False, also from "true"/"false" strings. Anything else is None."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return {"true": True, "false": False}.get(value.strip().lower())
    return None


def extract_json_object(text: str) -> str | None:
    """Return the first balanced brace-delimited substring of `text`.

    Braces inside JSON string literals don't count toward the balance.
    Returns None if there's no opening brace or it's never closed.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start:i + 1]
    return None


def keyword_fallback(question: str) -> ModeAnalysis:
    """Deterministic classification used when the LLM reply can't be parsed."""
    q = question.lower()

    if not any(k in q for k in AVIATION_KEYWORDS):
        return ModeAnalysis(
            relevant=False,
            mode=Mode.NONE,
            reasoning="Question does not contain aviation-related keywords",
            confidence=Confidence.MEDIUM,
            should_skip_api=True,
        )

    mode = Mode.BOTH
    if any(k in q for k in DEPARTURE_KEYWORDS):
        mode = Mode.DEPARTURES
    elif any(k in q for k in ARRIVAL_KEYWORDS):
        mode = Mode.ARRIVALS

    return ModeAnalysis(
        relevant=True,
        mode=mode,
        reasoning=f"Keyword-based fallback analysis ({mode.value})",
        confidence=Confidence.MEDIUM,
    )


def parse_analysis(text: str) -> ModeAnalysis:
    """Decode the classifier's JSON verdict. Raises ValueError if it isn't one."""
    candidate = extract_json_object(text) or text
    data = json.loads(candidate)  # json.JSONDecodeError is a ValueError
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")

    confidence = str(data.get("confidence", "medium")).lower()
    if confidence not in {c.value for c in Confidence}:
        confidence = Confidence.MEDIUM.value
    reasoning = str(data.get("reasoning") or "")

    relevant = _as_bool(data.get("relevant"))
    stated_mode = str(data.get("mode", "")).lower()

    # An explicit "none" mode is a verdict too, whatever "relevant" says
    if relevant is False or stated_mode == Mode.NONE.value:
        return ModeAnalysis(
            relevant=False,
            mode=Mode.NONE,
            reasoning=reasoning,
            confidence=confidence,
            should_skip_api=True,
        )

    try:
        mode = Mode(stated_mode)
    except ValueError:
        mode = Mode.NONE
    if mode not in _FETCHABLE:
        # Relevant but no usable mode: ask for everything
        logger.warning("Classifier returned unusable mode %r, using both", data.get("mode"))
        mode = Mode.BOTH

    return ModeAnalysis(
        relevant=relevant,
        mode=mode,
        reasoning=reasoning,
        confidence=confidence,
    )


class ModeClassifier:
    def __init__(self, llm):
        self._llm = llm

    async def classify(self, question: str, airport_code: str) -> ModeAnalysis:
        logger.info('Analyzing question for FlightAPI mode: "%s"', question)
        try:
            reply = await self._llm.ainvoke(
                [HumanMessage(content=build_classification_prompt(question, airport_code))]
            )
        except Exception as e:
            logger.error("Mode analysis error: %s", e)
            return ModeAnalysis(
                relevant=None,
                mode=Mode.ARRIVALS,
                reasoning="Default fallback due to analysis error",
                confidence=Confidence.LOW,
            )

        text = (reply.content or "").strip() if isinstance(reply.content, str) else ""
        try:
            analysis = parse_analysis(text)
        except ValueError as e:
            logger.warning("Could not parse mode analysis (%s); raw reply: %r", e, text)
            return keyword_fallback(question)

        logger.info(
            "Mode analysis: relevant=%s, mode=%s (%s confidence) - %s",
            analysis.relevant, analysis.mode.value, analysis.confidence.value, analysis.reasoning,
        )
        return analysis
