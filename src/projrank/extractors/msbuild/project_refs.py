"""Extract project and package references from MSBuild project files."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException, ElementTree

from projrank.errors import ManifestParseError
from projrank.model import ManifestRefs, PackageRef
from projrank.naming import derive_project_name, is_excluded

logger = logging.getLogger(__name__)


class MSBuildManifestLoader:
    """Read ``<ProjectReference>`` and ``<PackageReference>`` items."""

    def can_handle(self, manifest: Path) -> bool:
        from projrank.extractors.msbuild import is_msbuild_project

        return is_msbuild_project(manifest)

    def load(self, manifest: Path, exclude: Iterable[str] = ()) -> ManifestRefs:
        root = _parse(manifest)
        exclude = tuple(exclude)

        refs = ManifestRefs()
        for item in _iter_items(root, "ProjectReference"):
            include = item.get("Include")
            if not include:
                logger.debug("%s: ProjectReference without Include", manifest)
                continue
            name = derive_project_name(include)
            if is_excluded(name, exclude):
                logger.debug("%s: dropping excluded reference %s", manifest, name)
                continue
            refs.project_refs.append(name)

        for item in _iter_items(root, "PackageReference"):
            include = item.get("Include")
            if not include:
                logger.debug("%s: PackageReference without Include", manifest)
                continue
            refs.package_refs.append(
                PackageRef(name=include.strip(), version=_package_version(item))
            )

        logger.debug(
            "%s: %d project refs, %d package refs",
            manifest.name,
            len(refs.project_refs),
            len(refs.package_refs),
        )
        return refs


def _parse(manifest: Path) -> Element:
    try:
        return ElementTree.parse(str(manifest)).getroot()
    except ElementTree.ParseError as e:
        raise ManifestParseError(f"could not parse {manifest}: {e}") from e
    except DefusedXmlException as e:
        raise ManifestParseError(f"refusing unsafe XML in {manifest}: {e}") from e
    except OSError as e:
        raise ManifestParseError(f"could not read {manifest}: {e}") from e


def _local_name(tag: str) -> str:
    # Legacy project files put everything in the MSBuild namespace:
    # {http://schemas.microsoft.com/developer/msbuild/2003}ProjectReference
    return tag.rsplit("}", 1)[-1]


def _iter_items(root: Element, kind: str) -> Iterator[Element]:
    for element in root.iter():
        if isinstance(element.tag, str) and _local_name(element.tag) == kind:
            yield element


def _package_version(item: Element) -> str | None:
    """Return the package version from the attribute or a nested element."""
    version = item.get("Version")
    if version is None:
        for child in item:
            if isinstance(child.tag, str) and _local_name(child.tag) == "Version":
                version = child.text
                break
    if version is None:
        return None
    return version.strip() or None
