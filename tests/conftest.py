"""Shared fixtures: small MSBuild source trees on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

from projrank.model import PackageRef
from projrank.registry import ProjectRegistry


def csproj(
    project_refs: list[str] = (),
    package_refs: list[tuple[str, str | None]] = (),
) -> str:
    """Return an SDK-style project file referencing the given projects."""
    lines = ['<Project Sdk="Microsoft.NET.Sdk">', "  <ItemGroup>"]
    for ref in project_refs:
        lines.append(f'    <ProjectReference Include="..\\{ref}\\{ref}.csproj" />')
    for name, version in package_refs:
        if version is None:
            lines.append(f'    <PackageReference Include="{name}" />')
        else:
            lines.append(f'    <PackageReference Include="{name}" Version="{version}" />')
    lines += ["  </ItemGroup>", "</Project>", ""]
    return "\n".join(lines)


def write_project(root: Path, name: str, text: str) -> Path:
    path = root / name / f"{name}.csproj"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def solution(tmp_path: Path) -> Path:
    """A -> nothing, B -> A, C -> A and B, with a few packages."""
    root = tmp_path / "solution"
    write_project(root, "A", csproj(package_refs=[("Newtonsoft.Json", "13.0.1")]))
    write_project(
        root,
        "B",
        csproj(["A"], [("Newtonsoft.Json", "13.0.1"), ("Serilog", "3.1.0")]),
    )
    write_project(root, "C", csproj(["A", "B"], [("Serilog", None)]))
    return root


def make_registry(graph: dict[str, list[str]]) -> ProjectRegistry:
    registry = ProjectRegistry()
    for name, refs in graph.items():
        registry.register(name, refs)
    return registry


@pytest.fixture
def abc_registry() -> ProjectRegistry:
    registry = ProjectRegistry()
    registry.register("A", [], [PackageRef("Newtonsoft.Json", "13.0.1")])
    registry.register(
        "B", ["A"], [PackageRef("Newtonsoft.Json", "13.0.1"), PackageRef("Serilog", "3.1.0")]
    )
    registry.register("C", ["A", "B"], [PackageRef("Serilog")])
    return registry
