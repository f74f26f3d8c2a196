"""
Answer generator: the final LLM call that writes the user-facing reply.

Persona goes in the system message, data in the user message. Unlike the
classifier, failures here are real failures: they're translated into our error
taxonomy and surfaced, never retried or papered over.
"""
import logging

import openai
from langchain_core.messages import HumanMessage, SystemMessage

from flight_assistant.agent.llm import map_llm_error
from flight_assistant.agent.prompts import SUPPORT_SYSTEM_PROMPT, build_answer_prompt
from flight_assistant.errors import GenerationError
from flight_assistant.models.schedule import AggregatedSchedule, Mode, ModeAnalysis

logger = logging.getLogger("flight-assistant.answer")


class AnswerGenerator:
    def __init__(self, llm, top_n: int = 8):
        self._llm = llm
        self._top_n = top_n

    async def generate_answer(
        self,
        question: str,
        schedule: AggregatedSchedule,
        airport_code: str,
        mode: Mode,
        analysis: ModeAnalysis,
    ) -> str:
        logger.info('Generating answer for: "%s" (Airport: %s)', question, airport_code)
        messages = [
            SystemMessage(content=SUPPORT_SYSTEM_PROMPT),
            HumanMessage(content=build_answer_prompt(
                question, schedule, airport_code, mode, analysis, top_n=self._top_n,
            )),
        ]

        try:
            reply = await self._llm.ainvoke(messages)
        except openai.OpenAIError as exc:
            logger.error("LLM service error: %s", exc)
            raise map_llm_error(exc) from exc

        answer = reply.content if isinstance(reply.content, str) else ""
        answer = answer.strip()
        if not answer:
            raise GenerationError("No answer generated by LLM")

        logger.info("Generated answer (%d characters)", len(answer))
        return answer
