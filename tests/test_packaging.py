"""Tests for the project metadata."""

from __future__ import annotations

import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _project() -> dict:
    return tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]


def test_runtime_dependencies_match_imports() -> None:
    names = [dep.split(">")[0].split("=")[0].strip() for dep in _project()["dependencies"]]
    assert names == ["PyYAML"]


def test_console_script_points_at_cli() -> None:
    assert _project()["scripts"] == {"postgen": "postgen.cli:main"}
