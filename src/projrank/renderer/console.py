"""Console statistics and verbose listings."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import TextIO

from projrank.model import PackageRef, Project
from projrank.registry import ProjectRegistry


@dataclass(frozen=True)
class ReportStats:
    """Aggregate counts over a ranked project graph."""

    discovered_projects: int
    selected_projects: int
    total_project_refs: int
    total_package_refs: int
    unique_package_refs: int
    unique_package_names: int
    max_rank: int | None


def compute_stats(registry: ProjectRegistry, discovered: int) -> ReportStats:
    projects = registry.all()
    package_refs = [r for p in projects for r in p.package_refs]
    ranks = [p.rank for p in projects if p.rank is not None]
    return ReportStats(
        discovered_projects=discovered,
        selected_projects=len(projects),
        total_project_refs=sum(len(p.project_refs) for p in projects),
        total_package_refs=len(package_refs),
        unique_package_refs=len(set(package_refs)),
        # NuGet package ids are case-insensitive
        unique_package_names=len({r.name.casefold() for r in package_refs}),
        max_rank=max(ranks) if ranks else None,
    )


def unique_package_refs(registry: ProjectRegistry) -> list[PackageRef]:
    refs = {r for p in registry for r in p.package_refs}
    return sorted(refs, key=lambda r: (r.name.casefold(), r.version or ""))


def group_by_rank(
    registry: ProjectRegistry, descending: bool = False
) -> list[tuple[int, list[Project]]]:
    """Return ``(rank, projects)`` pairs with projects sorted by name."""
    groups: dict[int, list[Project]] = defaultdict(list)
    for project in registry.sorted_projects():
        if project.rank is None:
            raise ValueError(f"project {project.name!r} has no rank")
        groups[project.rank].append(project)
    return sorted(groups.items(), reverse=descending)


def print_report(
    registry: ProjectRegistry,
    stats: ReportStats,
    stream: TextIO,
    verbose: bool = False,
) -> None:
    """Print the summary counts and, if *verbose*, per-project listings."""
    print(f"Total Projects: {stats.discovered_projects}", file=stream)
    print(f"Selected Projects: {stats.selected_projects}", file=stream)
    print(f"Total ProjectRefs: {stats.total_project_refs}", file=stream)
    print(f"Total PackageRefs: {stats.total_package_refs}", file=stream)
    print(f"Unique PackageRefs: {stats.unique_package_refs}", file=stream)
    if stats.max_rank is not None:
        print(f"Max Rank: {stats.max_rank}", file=stream)

    if not verbose:
        return

    for rank, projects in group_by_rank(registry):
        print(f"\nRank {rank}", file=stream)
        for project in projects:
            print(f"  {project.name}", file=stream)
            _print_list("ProjectRefs", project.project_refs, stream)
            _print_list("PackageRefs", [str(r) for r in project.package_refs], stream)
            _print_list("ReferencedBy", registry.dependents(project.name), stream)

    print("\nUnique Package Refs", file=stream)
    for ref in unique_package_refs(registry):
        print(f"  {ref}", file=stream)


def _print_list(title: str, items: list[str], stream: TextIO) -> None:
    print(f"    {title}", file=stream)
    for item in items:
        print(f"      {item}", file=stream)
