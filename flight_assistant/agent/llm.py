"""
LLM factory: creates configured chat models for the two LLM calls we make.

The upstream is any OpenAI-compatible chat-completions endpoint (OpenRouter by
default), so ChatOpenAI with a custom base_url does the job. Two presets:
- classification: short, near-deterministic JSON answer
- answer: longer, slightly warmer support-agent prose
Retries are off; rate limits and outages surface to the caller once.
"""
import openai
from langchain_openai import ChatOpenAI

from flight_assistant.config import LLMConfig
from flight_assistant.errors import (
    LLM,
    QuotaExceededError,
    RequestTimeoutError,
    UpstreamAuthError,
    UpstreamError,
    UpstreamRateLimitError,
)

CLASSIFICATION_PARAMS = {"max_tokens": 200, "temperature": 0.1}

ANSWER_PARAMS = {
    "max_tokens": 1500,
    "temperature": 0.3,
    "top_p": 0.9,
    "frequency_penalty": 0.1,
    "presence_penalty": 0.1,
}


def get_llm(config: LLMConfig, **params) -> ChatOpenAI:
    """Build a ChatOpenAI instance for the configured endpoint and model."""
    return ChatOpenAI(
        model=config.model,
        api_key=config.api_key,
        base_url=config.base_url,
        timeout=config.timeout,
        max_retries=0,
        default_headers={"HTTP-Referer": config.referer, "X-Title": config.title},
        **params,
    )


def get_classification_llm(config: LLMConfig) -> ChatOpenAI:
    return get_llm(config, **CLASSIFICATION_PARAMS)


def get_answer_llm(config: LLMConfig) -> ChatOpenAI:
    return get_llm(config, **ANSWER_PARAMS)


def map_llm_error(exc: Exception) -> UpstreamError:
    """Translate an OpenAI SDK exception into our taxonomy."""
    if isinstance(exc, openai.APITimeoutError):
        return RequestTimeoutError(
            "LLM request timeout. Please try again with a simpler question.", service=LLM
        )
    if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
        return UpstreamAuthError(
            "Invalid OpenRouter API key. Please check your configuration.", service=LLM
        )
    if isinstance(exc, openai.RateLimitError):
        return UpstreamRateLimitError(
            "OpenRouter rate limit exceeded. Please try again later.", service=LLM
        )
    if isinstance(exc, openai.APIStatusError) and exc.status_code == 402:
        return QuotaExceededError("OpenRouter account has insufficient credits.", service=LLM)
    return UpstreamError(f"Failed to generate answer: {exc}", service=LLM)
