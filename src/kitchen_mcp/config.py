"""Environment-driven configuration for the HEB server.

Settings are read once at process start. A missing or malformed required
variable is a startup failure, never a per-call one.
"""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .core.errors import ConfigurationError

REQUIRED_HEB_VARS = {
    "sat_cookie": "HEB_SAT_COOKIE",
    "jsessionid": "HEB_JSESSIONID",
    "reese84": "HEB_REESE84",
    "store_id": "HEB_STORE_ID",
}


class HEBSettings(BaseModel):
    """Session cookies and store selection for the HEB GraphQL API."""

    model_config = ConfigDict(frozen=True)

    sat_cookie: str = Field(min_length=1, description="HEB `sat` auth cookie.")
    jsessionid: str = Field(min_length=1, description="HEB JSESSIONID cookie.")
    reese84: str = Field(min_length=1, description="HEB reese84 bot-protection cookie.")
    store_id: str = Field(min_length=1, description="Numeric HEB store id.")
    default_list_id: Optional[str] = Field(
        default=None,
        description="Shopping list used when a tool call omits list_id.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")

    @field_validator("store_id")
    @classmethod
    def _numeric_store(cls, value: str) -> str:
        if not value.strip().isdigit():
            raise ValueError("must be numeric")
        return value.strip()

    @property
    def store_number(self) -> int:
        return int(self.store_id)

    @property
    def secrets(self) -> tuple[str, ...]:
        """Values that must never appear in logs."""
        return (self.sat_cookie, self.jsessionid, self.reese84)


def load_heb_settings(environ: Optional[Mapping[str, str]] = None) -> HEBSettings:
    """Build settings from the environment, reporting every problem at once."""
    env = os.environ if environ is None else environ

    problems = [
        f"{var}: {var} is required"
        for var in REQUIRED_HEB_VARS.values()
        if not env.get(var, "").strip()
    ]
    if problems:
        raise ConfigurationError(_format_problems(problems))

    values = {field: env[var].strip() for field, var in REQUIRED_HEB_VARS.items()}
    default_list = env.get("HEB_DEFAULT_LIST_ID", "").strip()
    if default_list:
        values["default_list_id"] = default_list
    values["log_level"] = get_log_level(env)

    try:
        return HEBSettings(**values)
    except PydanticValidationError as exc:
        problems = [
            f"{REQUIRED_HEB_VARS.get(str(err['loc'][0]), err['loc'][0])}: {err['msg']}"
            for err in exc.errors()
        ]
        raise ConfigurationError(_format_problems(problems)) from exc


def _format_problems(problems: list[str]) -> str:
    return (
        "Environment validation failed:\n"
        + "\n".join(problems)
        + "\n\nPlease ensure all required environment variables are set in your MCP client configuration."
    )


def get_log_level(environ: Optional[Mapping[str, str]] = None) -> str:
    env = os.environ if environ is None else environ
    return env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
