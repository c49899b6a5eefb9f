"""In-memory project graph keyed by project name."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from projrank.errors import DuplicateProjectError, UnknownProjectError
from projrank.model import PackageRef, Project

logger = logging.getLogger(__name__)


class ProjectRegistry:
    """Directed graph of projects: one node per project, edges are project refs.

    Insertion order is preserved, but callers that need a deterministic
    listing should use :meth:`sorted_projects`.
    """

    def __init__(self) -> None:
        self._projects: dict[str, Project] = {}

    def register(
        self,
        name: str,
        project_refs: Iterable[str] = (),
        package_refs: Iterable[PackageRef] = (),
        path: Path | None = None,
    ) -> Project:
        """Add a project; raise DuplicateProjectError if *name* is taken."""
        existing = self._projects.get(name)
        if existing is not None:
            raise DuplicateProjectError(
                name,
                str(existing.path) if existing.path else None,
                str(path) if path else None,
            )
        project = Project(
            name=name,
            project_refs=list(project_refs),
            package_refs=list(package_refs),
            path=path,
        )
        self._projects[name] = project
        logger.debug("Registered %s (%d project refs)", name, len(project.project_refs))
        return project

    def get(self, name: str) -> Project:
        try:
            return self._projects[name]
        except KeyError:
            raise UnknownProjectError(name) from None

    def all(self) -> list[Project]:
        return list(self._projects.values())

    def names(self) -> list[str]:
        return list(self._projects)

    def sorted_projects(self) -> list[Project]:
        return sorted(self._projects.values(), key=lambda p: p.name)

    def dependents(self, name: str) -> list[str]:
        """Return the sorted names of projects that reference *name*."""
        return sorted(
            p.name for p in self._projects.values() if name in p.project_refs
        )

    def adjacency(self) -> dict[str, list[str]]:
        """Return name -> project refs, suitable for graph algorithms."""
        return {name: list(p.project_refs) for name, p in self._projects.items()}

    def __contains__(self, name: object) -> bool:
        return name in self._projects

    def __iter__(self) -> Iterator[Project]:
        return iter(self._projects.values())

    def __len__(self) -> int:
        return len(self._projects)
