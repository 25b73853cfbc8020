from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import roominvoice.core.logger as core_logger
from roominvoice.core.profiles import HOME_ENV


@pytest.fixture(autouse=True)
def _isolated_work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Keep settings and log files out of the real home directory."""

    work = tmp_path / "work"
    monkeypatch.setenv(HOME_ENV, str(work))
    monkeypatch.setattr(core_logger, "_LOGGER", None, raising=False)
    yield work

    app_logger = logging.getLogger("roominvoice")
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
