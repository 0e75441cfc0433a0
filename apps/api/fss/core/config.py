"""Harness configuration."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from fss.errors import SetupError


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables."""

    client_backend: Literal["memory", "http"] = "memory"
    endpoint: str | None = None
    request_timeout_seconds: float = 30.0
    poll_interval_seconds: float = 5.0
    max_state_polls: int = 60

    model_config = SettingsConfigDict(env_prefix="FSS_", extra="ignore")


class AcceptanceSettings(BaseSettings):
    """Settings the acceptance scenarios read from ``TF_VAR_*`` variables."""

    compartment_id_for_create: str | None = None

    model_config = SettingsConfigDict(env_prefix="TF_VAR_", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def get_required_env_setting(name: str) -> str:
    """Return a required acceptance setting or abort the run before any step executes."""
    settings = AcceptanceSettings()
    if name not in AcceptanceSettings.model_fields:
        raise SetupError(f"Unknown acceptance setting {name}")

    value = getattr(settings, name)
    if value is None or not str(value).strip():
        raise SetupError(f"Required env setting TF_VAR_{name} is missing")
    return str(value).strip()
