"""
Tests for the LLM factory presets. Building a ChatOpenAI doesn't touch the
network, so we can check the sampling parameters directly.
"""
from flight_assistant.agent.llm import get_answer_llm, get_classification_llm
from flight_assistant.config import LLMConfig

CONFIG = LLMConfig(base_url="https://openrouter.test/api/v1", api_key="test-key", model="test/model")


def test_classification_preset():
    llm = get_classification_llm(CONFIG)
    assert llm.model_name == "test/model"
    assert llm.temperature == 0.1
    assert llm.max_tokens == 200
    assert llm.max_retries == 0


def test_answer_preset():
    llm = get_answer_llm(CONFIG)
    assert llm.temperature == 0.3
    assert llm.max_tokens == 1500
    assert llm.top_p == 0.9
    assert llm.frequency_penalty == 0.1
    assert llm.presence_penalty == 0.1
    assert llm.request_timeout == 60.0
    assert llm.default_headers["X-Title"] == "Flight Assistant AI"
