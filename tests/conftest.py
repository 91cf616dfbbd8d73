"""
Shared fixtures for code query tests.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import logging
from pathlib import Path
from typing import Callable, Dict

import pytest

from code_query.core.settings_manager import SettingsManager
from code_query.logging import PACKAGE_LOGGER_NAME


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Fresh settings singleton and no CODE_QUERY_* variables for every test."""
    for name in (
        "CODE_QUERY_IGNORE_FILENAME",
        "CODE_QUERY_DEFAULT_GLOB",
        "CODE_QUERY_LINES_ABOVE",
        "CODE_QUERY_LINES_BELOW",
        "CODE_QUERY_DIALECTS",
        "CODE_QUERY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    SettingsManager._instance = None
    SettingsManager._initialized = False
    SettingsManager._cli_overrides = {}
    yield
    SettingsManager._instance = None
    SettingsManager._initialized = False
    SettingsManager._cli_overrides = {}

    # CLI tests attach a handler bound to the runner's (now closed) stream.
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def make_files(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Create files under tmp_path from a {relative_path: content} mapping."""

    def _make(files: Dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _make
