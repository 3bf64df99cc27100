from typing import Literal, Optional

from pydantic import AnyHttpUrl, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://gateway.watsonplatform.net/concept-insights/api"


class Settings(BaseSettings):

    # ---- credentials ----
    username: Optional[str] = None
    password: Optional[SecretStr] = None

    # ---- endpoint ----
    api_base_url: AnyHttpUrl = DEFAULT_API_BASE_URL
    verify_ssl: bool = True
    timeout_seconds: float = 60.0
    user_agent: str = "concept-insights-client/0.1.0"

    # ---- transport retries (off unless configured) ----
    total_retries: int = 0
    backoff_factor: float = 0.5

    # ---- app/runtime ----
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(
        env_file = ".env",
        env_prefix="CONCEPT_INSIGHTS_",      # CONCEPT_INSIGHTS_USERNAME, CONCEPT_INSIGHTS_API_BASE_URL, etc.
        extra = "ignore",
        validate_default=True,
    )


def get_settings() -> Settings:
    """Builds settings from the environment and the optional .env file."""
    return Settings()
