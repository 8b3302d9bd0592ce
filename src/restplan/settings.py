"""Settings for restplan query translation."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class RestPlanSettings(BaseSettings):
    """restplan configuration settings."""

    # Logging
    LOG_LEVEL: str = "INFO"
    # Forward translation diagnostics (warnings/errors) to the logging sink
    LOG_DIAGNOSTICS: bool = True

    # Projection rendering: "string" joins field names with spaces, "list" keeps a list
    ATTRIBUTES_FORMAT: Literal["string", "list"] = "string"

    # Term search
    RESTRICT_SEARCH_FIELDS: bool = False
    SEARCH_CASE_SENSITIVE: bool = False

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = RestPlanSettings()
