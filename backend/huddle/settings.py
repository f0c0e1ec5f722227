"""Settings for the Huddle backend with storage and observability configuration."""

from __future__ import annotations

import json
from typing import Any, Tuple

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CORRUPTION_POLICIES = ("reset", "strict")


def _env_field(default, *env_names: str):
    if env_names:
        alias = AliasChoices(*env_names) if len(env_names) > 1 else env_names[0]
        return Field(default=default, validation_alias=alias)
    return Field(default=default)


def _split_values(value: Any) -> Tuple[str, ...]:
    """Normalise env/JSON list formats into a tuple of stripped strings.

    Supports:
    - empty / missing -> ()
    - comma-separated string -> tuple
    - JSON string (e.g. '["alice","bob"]') -> tuple
    - list / tuple / set -> tuple
    """
    if value in (None, ""):
        return ()
    if isinstance(value, (list, tuple, set)):
        return tuple(str(item).strip() for item in value if str(item).strip())
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return ()
        if text.startswith("["):
            try:
                data = json.loads(text)
            except ValueError:
                data = None
            if isinstance(data, list):
                return tuple(str(item).strip() for item in data if str(item).strip())
        return tuple(part.strip() for part in text.split(",") if part.strip())
    return ()


class Settings(BaseSettings):
    # JSON document store
    data_dir: str = _env_field("./data", "HUDDLE_DATA_DIR", "DATA_DIR")
    # "reset" moves a malformed document aside and starts from []; "strict" raises
    storage_corruption_policy: str = _env_field("reset", "STORAGE_CORRUPTION_POLICY")
    admin_usernames: Any = _env_field((), "ADMIN_USERNAMES")

    environment: str = _env_field("production", "ENV", "APP_ENV", "ENVIRONMENT")
    obs_enabled: bool = _env_field(True, "OBS_ENABLED")
    obs_log_level: str = _env_field("INFO", "LOG_LEVEL")
    obs_log_sampling_rate_info: float = _env_field(1.0, "LOG_SAMPLING_RATE_INFO")
    service_name: str = _env_field("huddle-api", "SERVICE_NAME")
    git_commit: str = _env_field("unknown", "GIT_COMMIT", "COMMIT_SHA", "SOURCE_VERSION")

    cors_allow_origins: Any = _env_field((), "CORS_ALLOW_ORIGINS")

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        case_sensitive=False,
        env_nested_delimiter="__",
        populate_by_name=True,
    )

    # Environment helper
    def is_prod(self) -> bool:
        return self.environment.lower() in ("prod", "production", "live")

    def admin_username_set(self) -> frozenset[str]:
        return frozenset(name.lower() for name in self.admin_usernames)

    @field_validator("admin_usernames", mode="before")
    def _split_admins(cls, value):  # type: ignore[override]
        return _split_values(value)

    @field_validator("cors_allow_origins", mode="before")
    def _split_cors(cls, value):  # type: ignore[override]
        return _split_values(value)

    @field_validator("storage_corruption_policy", mode="before")
    def _check_policy(cls, value):  # type: ignore[override]
        policy = str(value or "reset").strip().lower()
        if policy not in CORRUPTION_POLICIES:
            raise ValueError(f"storage_corruption_policy must be one of {CORRUPTION_POLICIES}")
        return policy

    @field_validator("obs_log_level", mode="before")
    def _normalise_level(cls, value):  # type: ignore[override]
        return str(value or "INFO").upper()


settings = Settings()


def override(**values: Any) -> Settings:
    """Return a copy of the global settings with the given fields replaced."""
    return settings.model_copy(update=values)


__all__ = ["CORRUPTION_POLICIES", "Settings", "settings", "override"]
