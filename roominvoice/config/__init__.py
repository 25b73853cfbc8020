"""Runtime configuration for roominvoice.

Values come from the environment; ``.env`` is loaded when
:mod:`roominvoice.core.profiles` is imported, which the CLI always does.
Nothing here is cached: each call resolves
the current environment so tests and long-running shells see updates.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from roominvoice.core.errors import ConfigError


DEFAULT_SHEETS_BASE_URL = "https://docs.google.com"
DEFAULT_USER_AGENT = "RoomInvoice/1.0"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

SHEETS_BASE_URL_ENV = "ROOMINVOICE_SHEETS_BASE_URL"
HTTP_TIMEOUT_ENV = "ROOMINVOICE_HTTP_TIMEOUT"
USER_AGENT_ENV = "ROOMINVOICE_USER_AGENT"
GEMINI_API_KEY_ENVS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
GEMINI_MODEL_ENV = "ROOMINVOICE_GEMINI_MODEL"


@dataclass(frozen=True, slots=True)
class SheetsConfig:
    """Settings for the public sheet query endpoint.

    ``timeout_sec`` of ``None`` leaves the transport default in place.
    """

    base_url: str = DEFAULT_SHEETS_BASE_URL
    timeout_sec: float | None = None
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True, slots=True)
class DraftingConfig:
    """Settings for the AI drafting collaborator."""

    api_key: str | None = None
    model: str = DEFAULT_GEMINI_MODEL


def _read_env(key: str) -> str | None:
    value = os.getenv(key)
    if value is None:
        return None
    return value.strip()


def _read_env_float(key: str) -> float | None:
    value = _read_env(key)
    if value is None or value == "":
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise ConfigError(f"Environment variable {key} must be a number") from exc
    if parsed <= 0:
        raise ConfigError(f"Environment variable {key} must be positive")
    return parsed


def resolve_sheets_config() -> SheetsConfig:
    """Resolve sheet endpoint configuration from the environment."""

    base_url = _read_env(SHEETS_BASE_URL_ENV) or DEFAULT_SHEETS_BASE_URL
    return SheetsConfig(
        base_url=base_url.rstrip("/"),
        timeout_sec=_read_env_float(HTTP_TIMEOUT_ENV),
        user_agent=_read_env(USER_AGENT_ENV) or DEFAULT_USER_AGENT,
    )


def resolve_drafting_config() -> DraftingConfig:
    """Resolve drafting configuration; the API key may be absent."""

    api_key = None
    for key in GEMINI_API_KEY_ENVS:
        api_key = _read_env(key)
        if api_key:
            break
    return DraftingConfig(
        api_key=api_key or None,
        model=_read_env(GEMINI_MODEL_ENV) or DEFAULT_GEMINI_MODEL,
    )


__all__ = [
    "DEFAULT_SHEETS_BASE_URL",
    "DEFAULT_GEMINI_MODEL",
    "DraftingConfig",
    "SheetsConfig",
    "resolve_drafting_config",
    "resolve_sheets_config",
]
