"""
Application settings from environment variables.

Settings is read once at startup. Components never touch it directly; instead
the lifespan hands each one a small frozen config struct (ScheduleApiConfig,
LLMConfig), so tests can build components with whatever config they like.
"""
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScheduleApiConfig(BaseModel):
    """Everything the schedule fetcher needs to talk to FlightAPI."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    api_key: str
    timeout: float = 30.0
    user_agent: str = "FlightAssistantAI/1.0"


class LLMConfig(BaseModel):
    """Connection + model settings for the chat-completions endpoint."""
    model_config = ConfigDict(frozen=True)

    base_url: str
    api_key: str
    model: str = "google/gemini-flash-1.5"
    model_label: str = "Gemini Flash 1.5"
    timeout: float = 60.0
    referer: str = "https://flight-assistant-ai.com"
    title: str = "Flight Assistant AI"


class Settings(BaseSettings):
    # Flight schedule API
    flight_api_base_url: str = "https://api.flightapi.io"
    flight_api_key: str = ""
    flight_api_timeout: float = 30.0

    # LLM (any OpenAI-compatible chat-completions endpoint, OpenRouter by default)
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_api_key: str = ""
    llm_model: str = "google/gemini-flash-1.5"
    llm_model_label: str = "Gemini Flash 1.5"
    llm_timeout: float = 60.0

    # CORS
    cors_origins: list[str] = ["*"]

    # How many countries/airlines to show in prompts and in the response summary
    prompt_top_n: int = 8
    summary_top_n: int = 10

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def schedule_api_config(self) -> ScheduleApiConfig:
        return ScheduleApiConfig(
            base_url=self.flight_api_base_url,
            api_key=self.flight_api_key,
            timeout=self.flight_api_timeout,
        )

    def llm_config(self) -> LLMConfig:
        return LLMConfig(
            base_url=self.openrouter_base_url,
            api_key=self.openrouter_api_key,
            model=self.llm_model,
            model_label=self.llm_model_label,
            timeout=self.llm_timeout,
        )


settings = Settings()
