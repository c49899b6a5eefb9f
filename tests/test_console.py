"""Tests for statistics and console output."""

from __future__ import annotations

import io

import pytest

from projrank.analysis import assign_ranks
from projrank.model import PackageRef
from projrank.registry import ProjectRegistry
from projrank.renderer.console import (
    compute_stats,
    group_by_rank,
    print_report,
    unique_package_refs,
)


def test_stats_for_abc(abc_registry) -> None:
    assign_ranks(abc_registry)
    stats = compute_stats(abc_registry, discovered=5)

    assert stats.discovered_projects == 5
    assert stats.selected_projects == 3
    assert stats.total_project_refs == 3
    assert stats.total_package_refs == 4
    # (Newtonsoft.Json, 13.0.1), (Serilog, 3.1.0), (Serilog, None)
    assert stats.unique_package_refs == 3
    assert stats.unique_package_names == 2
    assert stats.max_rank == 2


def test_unique_package_names_ignore_case() -> None:
    registry = ProjectRegistry()
    registry.register("A", package_refs=[PackageRef("Serilog", "3.1.0")])
    registry.register("B", package_refs=[PackageRef("serilog", "3.1.0")])

    stats = compute_stats(registry, discovered=2)

    assert stats.unique_package_refs == 2
    assert stats.unique_package_names == 1
    assert stats.max_rank is None


def test_group_by_rank(abc_registry) -> None:
    assign_ranks(abc_registry)

    ascending = [(r, [p.name for p in ps]) for r, ps in group_by_rank(abc_registry)]
    descending = [
        (r, [p.name for p in ps])
        for r, ps in group_by_rank(abc_registry, descending=True)
    ]

    assert ascending == [(0, ["A"]), (1, ["B"]), (2, ["C"])]
    assert descending == [(2, ["C"]), (1, ["B"]), (0, ["A"])]


def test_group_by_rank_requires_ranks(abc_registry) -> None:
    with pytest.raises(ValueError, match="has no rank"):
        group_by_rank(abc_registry)


def test_summary_report(abc_registry) -> None:
    assign_ranks(abc_registry)
    out = io.StringIO()

    print_report(abc_registry, compute_stats(abc_registry, 3), out)

    assert out.getvalue().splitlines() == [
        "Total Projects: 3",
        "Selected Projects: 3",
        "Total ProjectRefs: 3",
        "Total PackageRefs: 4",
        "Unique PackageRefs: 3",
        "Max Rank: 2",
    ]


def test_verbose_report_groups_by_rank(abc_registry) -> None:
    assign_ranks(abc_registry)
    out = io.StringIO()

    print_report(abc_registry, compute_stats(abc_registry, 3), out, verbose=True)
    text = out.getvalue()

    assert text.index("Rank 0") < text.index("Rank 1") < text.index("Rank 2")
    block_a = text[text.index("Rank 0") : text.index("Rank 1")]
    assert "  A\n" in block_a
    assert "    ReferencedBy\n      B\n      C\n" in block_a
    assert "      Newtonsoft.Json/13.0.1\n" in block_a
    tail = text[text.index("Unique Package Refs") :]
    assert tail.splitlines()[1:] == [
        "  Newtonsoft.Json/13.0.1",
        "  Serilog",
        "  Serilog/3.1.0",
    ]


def test_unique_package_refs_sorted(abc_registry) -> None:
    assert [str(r) for r in unique_package_refs(abc_registry)] == [
        "Newtonsoft.Json/13.0.1",
        "Serilog",
        "Serilog/3.1.0",
    ]
