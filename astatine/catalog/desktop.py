"""Desktop-entry discovery and parsing.

Walks XDG ``applications`` directories, parses ``.desktop`` files, and builds
the session catalog. Per-file failures are logged and skipped; the loader
never raises into the caller.
"""

from __future__ import annotations

import configparser
import logging
import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from ..errors import InvalidCandidateError
from .icons import resolve_icon
from .types import Candidate, Catalog, build_catalog

logger = logging.getLogger(__name__)

DESKTOP_ENTRY_GROUP = "Desktop Entry"
DESKTOP_SUFFIX = ".desktop"
_FIELD_CODE_RE = re.compile(r"%[fFuUdDnNickvm]")


@dataclass(frozen=True)
class DesktopEntry:
    """Fields of one ``[Desktop Entry]`` group that the launcher cares about."""

    desktop_id: str
    name: str
    exec_line: str
    icon: str
    entry_type: str
    no_display: bool
    hidden: bool

    def is_launchable(self) -> bool:
        if self.entry_type != "Application":
            return False
        if self.no_display or self.hidden:
            return False
        return bool(self.name) and bool(self.exec_line)


def default_application_dirs() -> list[Path]:
    """Return XDG application directories, user directory first."""
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    dirs = [Path(data_home) / "applications"]
    dirs.extend(Path(entry) / "applications" for entry in data_dirs.split(":") if entry)
    return dirs


def desktop_id_for(path: Path, base: Path) -> str:
    """Desktop-file id: path relative to ``base`` with ``/`` replaced by ``-``."""
    relative = path.relative_to(base).as_posix()
    return relative.replace("/", "-")


def iter_desktop_files(dirs: Iterable[Path]) -> Iterator[tuple[str, Path]]:
    """Yield ``(desktop_id, path)`` pairs, letting earlier dirs shadow later ones."""
    seen_ids: set[str] = set()
    for base in dirs:
        if not base.is_dir():
            continue
        try:
            paths = sorted(base.rglob(f"*{DESKTOP_SUFFIX}"))
        except OSError as exc:
            logger.warning("cannot scan %s: %s", base, exc)
            continue
        for path in paths:
            if not path.is_file():
                continue
            desktop_id = desktop_id_for(path, base)
            if desktop_id in seen_ids:
                continue
            seen_ids.add(desktop_id)
            yield desktop_id, path


def _parse_bool(value: str | None) -> bool:
    return (value or "").strip().lower() == "true"


def parse_desktop_file(path: Path, desktop_id: str | None = None) -> DesktopEntry | None:
    """Parse ``path`` into a ``DesktopEntry``.

    Returns ``None`` when the file has no ``[Desktop Entry]`` group. Read and
    syntax errors propagate to the caller.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False, delimiters=("=",))
    parser.optionxform = str
    with path.open(encoding="utf-8", errors="replace") as handle:
        parser.read_file(handle, source=str(path))
    if DESKTOP_ENTRY_GROUP not in parser:
        return None
    group = parser[DESKTOP_ENTRY_GROUP]
    return DesktopEntry(
        desktop_id=desktop_id or path.name,
        name=(group.get("Name") or "").strip(),
        exec_line=(group.get("Exec") or "").strip(),
        icon=(group.get("Icon") or "").strip(),
        entry_type=(group.get("Type") or "").strip(),
        no_display=_parse_bool(group.get("NoDisplay")),
        hidden=_parse_bool(group.get("Hidden")),
    )


def clean_exec_line(exec_line: str) -> str:
    """Drop ``%`` field codes, unescape ``%%``, and collapse whitespace."""
    stripped = _FIELD_CODE_RE.sub("", exec_line.replace("%%", "\0"))
    return " ".join(stripped.replace("\0", "%").split())


def load_candidates(
    dirs: Iterable[Path],
    icon_theme: str | None = None,
    icon_size: int = 32,
) -> list[Candidate]:
    """Parse every launchable desktop entry under ``dirs``, ordered by desktop id."""
    candidates: list[Candidate] = []
    for desktop_id, path in iter_desktop_files(dirs):
        try:
            entry = parse_desktop_file(path, desktop_id)
        except (OSError, configparser.Error, UnicodeError) as exc:
            logger.warning("skipping %s: %s", path, exc)
            continue
        if entry is None or not entry.is_launchable():
            continue
        command = clean_exec_line(entry.exec_line)
        try:
            candidate = Candidate(
                name=entry.name,
                launch_command=command,
                icon=resolve_icon(entry.icon, icon_theme, icon_size),
                desktop_id=desktop_id,
            )
        except InvalidCandidateError as exc:
            logger.warning("skipping %s: %s", path, exc)
            continue
        candidates.append(candidate)
    candidates.sort(key=lambda candidate: candidate.desktop_id.casefold())
    return candidates


def load_catalog(
    application_dirs: Iterable[Path] | None = None,
    icon_theme: str | None = None,
    icon_size: int = 32,
) -> Catalog:
    """Build the session catalog from extra dirs plus the XDG defaults.

    Any unexpected failure degrades to an empty catalog.
    """
    dirs = [Path(entry).expanduser() for entry in (application_dirs or [])]
    dirs.extend(default_application_dirs())
    try:
        catalog = build_catalog(load_candidates(dirs, icon_theme, icon_size))
    except Exception:
        logger.exception("catalog load failed; continuing with an empty catalog")
        return ()
    logger.info("loaded %d launchable entries from %d directories", len(catalog), len(dirs))
    return catalog
