"""Project name derivation and exclusion matching."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path, PureWindowsPath


def derive_project_name(path: str | Path) -> str:
    """Return the canonical project name for a manifest path.

    Works for file system paths as well as ``Include`` values from
    ``<ProjectReference>`` elements, which use Windows separators
    (``..\\Core\\Core.csproj`` -> ``Core``).  Only the last extension is
    removed, so dotted names such as ``Foo.Bar.csproj`` keep their dots.
    """
    # PureWindowsPath accepts both "\" and "/" as separators
    return PureWindowsPath(str(path).strip()).stem


def is_excluded(name: str, patterns: Iterable[str]) -> bool:
    """Return True if *name* contains any of *patterns*, ignoring case."""
    lowered = name.casefold()
    return any(p and p.casefold() in lowered for p in patterns)
