"""Package metadata and PEP 561 marker tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import pytest
import rtoml

PROJECT_ROOT = Path(__file__).resolve().parent.parent
PYPROJECT_PATH = PROJECT_ROOT / "pyproject.toml"


def _load_pyproject() -> dict[str, Any]:
    """Load and parse pyproject.toml from the project root."""
    return rtoml.load(PYPROJECT_PATH)


def _wheel_table() -> dict[str, Any]:
    tool_table = cast(dict[str, Any], _load_pyproject().get("tool", {}))
    hatch_table = cast(dict[str, Any], tool_table.get("hatch", {}))
    targets_table = cast(dict[str, Any], cast(dict[str, Any], hatch_table.get("build", {})).get("targets", {}))
    return cast(dict[str, Any], targets_table.get("wheel", {}))


def _get_package_dir() -> Path:
    """Locate the package directory based on pyproject.toml configuration."""
    for package_entry in cast(list[Any], _wheel_table().get("packages", [])):
        if isinstance(package_entry, str):
            candidate = PROJECT_ROOT / package_entry
            if candidate.is_dir():
                return candidate

    project_table = cast(dict[str, Any], _load_pyproject()["project"])
    fallback = PROJECT_ROOT / "src" / project_table["name"].replace("-", "_")
    if fallback.is_dir():
        return fallback

    raise AssertionError("Unable to locate package directory")


@pytest.mark.os_agnostic
def test_when_print_info_runs_it_outputs_metadata(capsys: pytest.CaptureFixture[str]) -> None:
    """print_info outputs package metadata."""
    from postmark_lite import print_info

    print_info()

    captured = capsys.readouterr().out
    assert "postmark_lite" in captured
    assert "version" in captured


@pytest.mark.os_agnostic
def test_metadata_constants_match_pyproject() -> None:
    """Static metadata agrees with pyproject.toml."""
    from postmark_lite import __init__conf__

    project_table = cast(dict[str, Any], _load_pyproject()["project"])
    scripts = cast(dict[str, str], project_table.get("scripts", {}))

    assert __init__conf__.name == "postmark_lite"
    assert __init__conf__.version == project_table["version"]
    assert __init__conf__.shell_command in scripts


@pytest.mark.os_agnostic
def test_py_typed_marker_exists() -> None:
    """PEP 561 py.typed marker exists in the package source."""
    py_typed = _get_package_dir() / "py.typed"
    assert py_typed.is_file(), f"PEP 561 marker not found at {py_typed}"


@pytest.mark.os_agnostic
def test_wheel_includes_marker_and_default_config() -> None:
    """py.typed and defaultconfig.toml are listed in wheel build includes."""
    includes = cast(list[str], _wheel_table().get("include", []))

    assert any("py.typed" in entry for entry in includes), "py.typed must be in wheel build includes"
    assert any("defaultconfig.toml" in entry for entry in includes)
