"""Data model for the project dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class PackageRef:
    """An external package dependency, optionally pinned to a version."""

    name: str
    version: str | None = None

    def __str__(self) -> str:
        if self.version:
            return f"{self.name}/{self.version}"
        return self.name


@dataclass
class ManifestRefs:
    """References declared by a single manifest."""

    project_refs: list[str] = field(default_factory=list)
    package_refs: list[PackageRef] = field(default_factory=list)


@dataclass
class Project:
    """A node in the dependency graph."""

    name: str
    project_refs: list[str] = field(default_factory=list)
    package_refs: list[PackageRef] = field(default_factory=list)
    path: Path | None = None
    rank: int | None = None  # None until ranks are assigned
