"""Settings for collabkit.

Values come from `COLLABKIT_*` environment variables, a project `.env`, and
the per-user `.env` that `collabkit doctor setup-auth` maintains.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "collabkit"
USER_ENV_HEADER = "# collabkit credentials and endpoints, written by `collabkit doctor setup-auth`"


def get_user_config_dir() -> Path:
    """Where the per-user `.env` lives: %APPDATA%, Application Support or XDG."""

    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA", str(Path.home()))) / APP_DIR_NAME
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_DIR_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config") / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    """KEY=VALUE pairs of a `.env` body; comments and malformed lines are skipped."""

    data: dict[str, str] = {}
    for line in map(str.strip, text.splitlines()):
        if line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        if key.strip():
            data[key.strip()] = value.strip().strip("\"'")
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Merge `values` into the user `.env`; None leaves a stored value untouched.

    Keys are written sorted so repeated setups produce stable files.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    merged = _parse_env_lines(env_path.read_text(encoding="utf-8")) if env_path.exists() else {}
    merged.update({key: value for key, value in values.items() if value is not None})

    body = [USER_ENV_HEADER, *(f"{key}={merged[key]}" for key in sorted(merged))]
    env_path.write_text("\n".join(body) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Connection, retry and paging settings shared by the CLI and the session."""

    model_config = SettingsConfigDict(
        env_prefix="COLLABKIT_",
        extra="ignore",
        case_sensitive=False,
        # Later files win: the user .env overrides the project one.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    graph_base_url: str = Field(
        default="https://graph.microsoft.com/v1.0",
        min_length=8,
        description="Base URL of the Graph-style REST API.",
    )
    access_token: str | None = Field(
        default=None,
        description="Bearer token for the remote API (acquired outside collabkit).",
    )
    site_id: str = Field(
        default="root",
        min_length=1,
        description="Site whose term store backs the taxonomy commands.",
    )

    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout per request (seconds).",
    )
    user_agent: str = Field(
        default="collabkit/0.1",
        min_length=1,
        description="User-Agent sent with every request.",
    )

    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        description="Max retries on transient failures (throttling, 503/504, network).",
    )
    retry_backoff_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Base delay for exponential backoff when no Retry-After is sent.",
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=999,
        description="$top used for collection requests.",
    )
