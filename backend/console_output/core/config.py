import logging
from typing import Any, Literal

from pydantic import AliasChoices, Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

_LOG = logging.getLogger(__name__)

# Configuration key shared by the settings alias and the request state.
ENABLE_OUTPUT_TO_CONSOLE_KEY = "EnableOutputToConsole"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Use top level .env file (one level above ./backend/)
        env_file="../.env",
        env_ignore_empty=True,
        extra="ignore",
        populate_by_name=True,
    )
    PROJECT_NAME: str = "console-output"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    SENTRY_DSN: HttpUrl | None = None

    # Raw string on purpose: only a case-insensitive "true" enables output.
    ENABLE_OUTPUT_TO_CONSOLE: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            ENABLE_OUTPUT_TO_CONSOLE_KEY, "ENABLE_OUTPUT_TO_CONSOLE"
        ),
    )

    @property
    def output_to_console_enabled(self) -> bool:
        return is_enabled_value(self.ENABLE_OUTPUT_TO_CONSOLE)


def is_enabled_value(value: Any) -> bool:
    """True only for the string "true", compared case-insensitively."""
    if not isinstance(value, str):
        return False
    return value.lower() == "true"


def read_output_to_console(source: Any) -> bool:
    """
    Resolve EnableOutputToConsole from a Settings object or a plain mapping.

    Any failure while reading resolves to False: never emit when uncertain.
    """
    if source is None:
        return False
    try:
        if isinstance(source, dict):
            raw = source.get(ENABLE_OUTPUT_TO_CONSOLE_KEY)
            if raw is None:
                raw = source.get("ENABLE_OUTPUT_TO_CONSOLE")
        else:
            raw = getattr(source, "ENABLE_OUTPUT_TO_CONSOLE", None)
        return is_enabled_value(raw)
    except Exception as e:
        _LOG.debug("EnableOutputToConsole unreadable, treating as disabled: %s", e)
        return False


settings = Settings()  # type: ignore
