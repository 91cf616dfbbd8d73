"""
Tests for package metadata consistency.

Author: Vasiliy Zdanovskiy
email: vasilyvz@gmail.com
"""

import re
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _setup_text() -> str:
    return (ROOT / "setup.py").read_text(encoding="utf-8")


def test_python_floor_matches_click() -> None:
    """click 8.2 requires Python 3.10, so the package must not claim 3.9."""
    requirements = (ROOT / "requirements.txt").read_text(encoding="utf-8")
    assert "click>=8.2" in requirements

    match = re.search(r'python_requires=">=3\.(\d+)"', _setup_text())
    assert match is not None
    assert int(match.group(1)) >= 10


def test_classifiers_start_at_floor() -> None:
    versions = [
        int(minor)
        for minor in re.findall(r"Programming Language :: Python :: 3\.(\d+)", _setup_text())
    ]
    assert versions
    assert min(versions) >= 10
