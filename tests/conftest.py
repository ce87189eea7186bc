"""Pytest configuration for test isolation.

The CLI reads Notion credentials and the user identity from the environment
(and from a ``.env`` in the working directory). Tests must never pick up a
developer's real values, so each test starts with those variables removed and
runs from its own temporary directory.

The CLI also configures the package logger once per process; reset that state
so every test sees an unconfigured, propagating logger (``caplog`` relies on
propagation to the root logger).
"""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from transactions_to_notion import logging_setup

_ENV_VARS = (
    "NOTION_API_KEY",
    "NOTION_DATABASE_ID",
    "NOTION_STATUS",
    "WHO_AM_I",
    "TRANSACTIONS_TO_NOTION_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture(autouse=True)
def _reset_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    pkg_logger = logging.getLogger("transactions_to_notion")
    saved = (list(pkg_logger.handlers), pkg_logger.level, pkg_logger.propagate)
    yield
    pkg_logger.handlers[:] = saved[0]
    pkg_logger.setLevel(saved[1])
    pkg_logger.propagate = saved[2]


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str], Path]:
    """Write dedented CSV text to a file under ``tmp_path`` and return its path."""

    def _write(text: str, name: str = "transactions.csv") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write
