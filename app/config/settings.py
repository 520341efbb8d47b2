from loguru import logger
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MODEL_PREFERENCES = "gpt-4o-mini,gpt-4o,gpt-4.1-mini"


class Settings(BaseSettings):
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str = Field(default="", validation_alias="LOG_FILE")
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    llm_provider: str = Field(
        default="openai",
        validation_alias="LLM_PROVIDER",
        description="Provider passed to get_model()",
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        validation_alias="LLM_MODEL",
        description="Fallback model used when no preferred model is available",
    )
    llm_model_preferences: str = Field(
        default=DEFAULT_MODEL_PREFERENCES,
        validation_alias="LLM_MODEL_PREFERENCES",
        description="Comma-separated model names, best first",
    )
    model_cache_ttl_seconds: int = Field(
        default=300,
        validation_alias="MODEL_CACHE_TTL_SECONDS",
        description="Freshness window for the resolved model name",
    )
    default_rest_time_sec: int = Field(
        default=60,
        validation_alias="DEFAULT_REST_TIME_SEC",
        description="Rest applied to exercises that arrive without one",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @field_validator("model_cache_ttl_seconds", "default_rest_time_sec")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        """Reject negative durations; fall back to zero with a warning."""
        if value < 0:
            logger.warning(f"Negative duration setting {value} is not allowed. Using 0.")
            return 0
        return value

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, value: str) -> str:
        """Warn when no key is configured.

        Plan generation can still be exercised with an injected text generator,
        so an empty key is not fatal.
        """
        if not value:
            logger.warning(
                "OPENAI_API_KEY is not set. The default text generator will not be able to reach the model. "
                "Set it in .env file or environment variables."
            )
        return value

    @property
    def model_preferences(self) -> list[str]:
        return [name.strip() for name in self.llm_model_preferences.split(",") if name.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
