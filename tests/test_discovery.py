"""Tests for manifest discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from projrank.discovery import find_manifests
from projrank.errors import ConfigError


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("<Project />")
    return path


def test_finds_manifests_recursively_in_stable_order(tmp_path: Path) -> None:
    _touch(tmp_path / "src" / "B" / "B.csproj")
    _touch(tmp_path / "src" / "A" / "A.csproj")
    _touch(tmp_path / "Root.csproj")
    _touch(tmp_path / "src" / "A" / "README.md")

    found = [p.relative_to(tmp_path).as_posix() for p in find_manifests(tmp_path)]

    assert found == ["Root.csproj", "src/A/A.csproj", "src/B/B.csproj"]


def test_skips_build_output_directories(tmp_path: Path) -> None:
    _touch(tmp_path / "App" / "App.csproj")
    _touch(tmp_path / "App" / "obj" / "Stale.csproj")
    _touch(tmp_path / "App" / "bin" / "Debug" / "Copy.csproj")

    assert [p.name for p in find_manifests(tmp_path)] == ["App.csproj"]


def test_extension_match_is_case_insensitive(tmp_path: Path) -> None:
    _touch(tmp_path / "Legacy.CSPROJ")
    _touch(tmp_path / "Tool.fsproj")

    assert [p.name for p in find_manifests(tmp_path)] == ["Legacy.CSPROJ"]
    found = {p.name for p in find_manifests(tmp_path, ["csproj", ".fsproj"])}
    assert found == {"Legacy.CSPROJ", "Tool.fsproj"}


def test_missing_root_is_a_config_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        list(find_manifests(tmp_path / "nope"))
