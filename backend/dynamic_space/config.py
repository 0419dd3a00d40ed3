"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - DYNAMIC_SPACE_DATA is the single value that selects discover mode;
      a blank value is normalised to None (standard mode)
    - Secrets (HF_TOKEN) come from environment variables, never hardcoded
    - get_settings() is cached (lru_cache): one instance per process, so
      the mode derived from it is fixed for the process lifetime

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works against huggingface.co
      out of the box
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Mode selection: URL of the curated CSV list (discover mode when set)
    dynamic_space_data: str | None = None

    @field_validator("dynamic_space_data", mode="before")
    @classmethod
    def blank_as_unset(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    # Hugging Face
    hf_token: str | None = None
    hub_url: str = "https://huggingface.co"
    space_domain: str = "hf.space"

    # Remote calls
    http_timeout_seconds: float = 30.0
    invoke_timeout_seconds: float = 300.0
    search_default_limit: int = 10

    # Drop image items from invoke results (text-only clients)
    no_image_content: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_dynamic_space_data_url(settings: Settings | None = None) -> str | None:
    """Location of the discovery list, or None in standard mode."""
    return (settings or get_settings()).dynamic_space_data


def is_dynamic_space_mode(settings: Settings | None = None) -> bool:
    return get_dynamic_space_data_url(settings) is not None
