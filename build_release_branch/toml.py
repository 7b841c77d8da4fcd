"""TOML configuration loading.

The tool is configured from an optional [tool.build-release-branch] table in
the repository's pyproject.toml. Uses tomlkit so the same parser handles any
pyproject.toml the repository already keeps.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomlkit
from pydantic import ValidationError

from .models import BuildConfig
from .shell import fatal

TOOL_TABLE = "build-release-branch"


def load_pyproject(path: Path) -> tomlkit.TOMLDocument:
    """Load and parse a pyproject.toml file."""
    return tomlkit.parse(path.read_text())


def get_tool_table(doc: tomlkit.TOMLDocument) -> dict[str, Any]:
    """Extract [tool.build-release-branch] as plain Python values.

    Returns an empty dict when the table is absent.
    """
    table = doc.get("tool", {}).get(TOOL_TABLE)
    if table is None:
        return {}
    return table.unwrap()


def load_config(root: Path) -> BuildConfig:
    """Build the configuration for the repository rooted at ``root``.

    A missing pyproject.toml or a missing table yields the defaults.

    Raises:
        SystemExit: If the table holds unknown keys or invalid values.
    """
    pyproject = root / "pyproject.toml"
    if not pyproject.exists():
        return BuildConfig()

    try:
        return BuildConfig.model_validate(get_tool_table(load_pyproject(pyproject)))
    except ValidationError as exc:
        fatal(f"Invalid [tool.{TOOL_TABLE}] in {pyproject}:\n{exc}")
