"""Catalog value types: candidates, icon references, and catalog checks."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ..errors import DuplicateLaunchCommandError, InvalidCandidateError

VECTOR_ICON_SUFFIXES = frozenset({".svg", ".svgz"})


@dataclass(frozen=True)
class VectorPath:
    """Icon stored as a scalable vector image."""

    path: Path


@dataclass(frozen=True)
class RasterPath:
    """Icon stored as a bitmap image."""

    path: Path


IconRef = VectorPath | RasterPath


def icon_ref_for_path(path: Path) -> IconRef:
    """Tag ``path`` as vector or raster based on its file suffix."""
    if path.suffix.lower() in VECTOR_ICON_SUFFIXES:
        return VectorPath(path)
    return RasterPath(path)


@dataclass(frozen=True)
class Candidate:
    """One launchable entry.

    Identity is ``launch_command``; ``desktop_id`` only records provenance.
    """

    name: str
    launch_command: str
    icon: IconRef
    desktop_id: str = ""

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise InvalidCandidateError("candidate name must not be empty")
        if not self.launch_command.strip():
            raise InvalidCandidateError(f"candidate {self.name!r} has an empty launch command")


Catalog = tuple[Candidate, ...]


def build_catalog(candidates: Iterable[Candidate]) -> Catalog:
    """Freeze ``candidates`` into a catalog, keeping the first of each launch command."""
    seen: set[str] = set()
    catalog: list[Candidate] = []
    for candidate in candidates:
        if candidate.launch_command in seen:
            continue
        seen.add(candidate.launch_command)
        catalog.append(candidate)
    return tuple(catalog)


def verify_catalog(catalog: Iterable[Candidate]) -> Catalog:
    """Return ``catalog`` as a tuple, raising when a launch command repeats."""
    frozen = tuple(catalog)
    seen: set[str] = set()
    for candidate in frozen:
        if candidate.launch_command in seen:
            raise DuplicateLaunchCommandError(candidate.launch_command)
        seen.add(candidate.launch_command)
    return frozen
