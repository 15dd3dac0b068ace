from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field


class Settings(BaseSettings):
    llm_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "SYMPTOM_INTAKE_LLM_API_KEY",
            "PERPLEXITY_API_KEY",
        ),
    )

    # External OpenAI-compatible chat completion server
    llm_base_url: str = "https://api.perplexity.ai"
    llm_model: str = "sonar"
    llm_max_tokens: int = 1024
    llm_temperature: float = 0.1
    llm_request_timeout_seconds: float = 30.0
    llm_log_enabled: bool = False
    llm_log_path: str = "logs/llm_calls.jsonl"

    # Sessions
    session_ttl_seconds: float = 3600.0
    session_sweep_interval_seconds: float = 300.0

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    model_config = {"env_prefix": "SYMPTOM_INTAKE_", "env_file": ".env", "extra": "ignore"}


settings = Settings()
