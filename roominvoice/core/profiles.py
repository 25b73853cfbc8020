from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

from .errors import ConfigError


load_dotenv(override=False)

LOGGER = logging.getLogger(__name__)

HOME_ENV = "ROOMINVOICE_HOME"
SETTINGS_FILE = "settings.yaml"


class UserSettings(BaseModel):
    """Values the landlord typed last time, restored on the next run.

    Attributes:
        sheet_url: Raw Google Sheet link, parsed again on every submission.
        range: A1 range text such as ``A1:K29``.
        bank_name: Bank shown in the payment block.
        account_number: Account number shown in the payment block.
        account_name: Account holder shown in the payment block.
        payment_note: Transfer note template, ``{thang}`` becomes the month.
    """

    model_config = ConfigDict(extra="ignore")

    sheet_url: str = (
        "https://docs.google.com/spreadsheets/d/"
        "1_9v2p0s4k2xQoR_C_5J6H7a8b9c0d1e2f3g4h5i6j7/edit#gid=0"
    )
    range: str = "A1:K29"
    bank_name: str = "MB Bank"
    account_number: str = "0123456789"
    account_name: str = "NGUYEN VAN A"
    payment_note: str = "CK tien nha thang {thang}"


def _work_dir() -> Path:
    env = os.getenv(HOME_ENV)
    if env:
        return Path(env).expanduser()
    return Path.home() / ".roominvoice"


def ensure_work_dirs() -> dict[str, Path]:
    """Create the work directory and its ``logs/`` folder; return both paths."""
    base = _work_dir()
    logs = base / "logs"
    for p in (base, logs):
        p.mkdir(parents=True, exist_ok=True)
    return {"base": base, "logs": logs}


def settings_path() -> Path:
    return _work_dir() / SETTINGS_FILE


def load_settings(path: str | Path | None = None) -> UserSettings:
    """Load stored settings, falling back to defaults.

    A missing file is normal on first run. An unreadable file is logged and
    ignored so a broken settings file never blocks invoicing.
    """
    cfg_path = Path(path) if path else settings_path()
    if not cfg_path.exists():
        return UserSettings()
    try:
        with cfg_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError("settings root must be a mapping")
        return UserSettings.model_validate(data)
    except (OSError, yaml.YAMLError, ValueError, ValidationError) as exc:
        LOGGER.warning("Could not read settings from %s: %s", cfg_path, exc)
        return UserSettings()


def save_settings(settings: UserSettings, path: str | Path | None = None) -> Path:
    cfg_path = Path(path) if path else settings_path()
    try:
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
        with cfg_path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(settings.model_dump(), f, allow_unicode=True, sort_keys=False)
    except OSError as e:
        raise ConfigError(f"Không thể lưu cài đặt: {cfg_path}: {e}") from e
    return cfg_path


def update_settings(settings: UserSettings, overrides: Dict[str, Any]) -> UserSettings:
    """Return a copy with every non-None override applied."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return settings
    return settings.model_copy(update=changes)
