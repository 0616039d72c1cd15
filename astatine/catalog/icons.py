"""Icon-theme lookup for desktop entries.

Resolves an ``Icon=`` value to a file on disk and tags it as vector or raster.
Themes are searched through the directories their ``index.theme`` declares,
following ``Inherits=`` before ``hicolor``. Themes without an index are
scanned for ``<size>/<context>`` and ``<context>/<size>`` layouts. Missing
icons fall back to the generic executable icon.
"""

from __future__ import annotations

import configparser
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from .types import IconRef, VectorPath, icon_ref_for_path

logger = logging.getLogger(__name__)

GENERIC_ICON_NAME = "application-x-executable"
FALLBACK_THEME = "hicolor"
ICON_EXTENSIONS = (".svg", ".png", ".xpm")
STRIPPED_EXTENSIONS = ICON_EXTENSIONS + (".svgz",)
PIXMAPS_DIR = Path("/usr/share/pixmaps")
THEME_INDEX_FILENAME = "index.theme"

_SIZE_DIR_RE = re.compile(r"^(\d+)(?:x\d+)?(?:@(\d+)x?)?$")


@dataclass(frozen=True)
class ThemeDirectory:
    """One icon directory of a theme, relative to the theme root."""

    path: str
    size: int
    kind: str = "Threshold"
    scale: int = 1
    min_size: int = 0
    max_size: int = 0
    threshold: int = 2

    def matches(self, size: int) -> bool:
        if self.kind == "Fixed":
            return size == self.size
        if self.kind == "Scalable":
            return self.min_size <= size <= self.max_size
        return self.size - self.threshold <= size <= self.size + self.threshold

    def distance(self, size: int) -> int:
        if self.kind == "Scalable":
            if size < self.min_size:
                return self.min_size - size
            if size > self.max_size:
                return size - self.max_size
            return 0
        return abs(self.size - size)

    def rank(self, size: int) -> tuple[int, int, int]:
        """Sort key: matching raster sizes, then matching scalable, then nearest."""
        if self.matches(size):
            tier = 1 if self.kind == "Scalable" else 0
        else:
            tier = 2
        return (tier, int(self.scale != 1), self.distance(size))


@dataclass(frozen=True)
class ThemeIndex:
    directories: tuple[ThemeDirectory, ...]
    inherits: tuple[str, ...] = ()


_ICON_PATH_CACHE: dict[tuple[str, str | None, int], Path | None] = {}
_THEME_INDEX_CACHE: dict[str, ThemeIndex | None] = {}


def clear_icon_cache() -> None:
    _ICON_PATH_CACHE.clear()
    _THEME_INDEX_CACHE.clear()


def icon_base_dirs() -> list[Path]:
    """Return icon base directories in lookup order."""
    data_home = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    dirs = [Path.home() / ".icons", Path(data_home) / "icons"]
    dirs.extend(Path(entry) / "icons" for entry in data_dirs.split(":") if entry)
    return dirs


def _split_list(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _int_option(section: configparser.SectionProxy, key: str, default: int) -> int:
    try:
        return int(section.get(key, "").strip())
    except ValueError:
        return default


def parse_theme_index(path: Path) -> ThemeIndex | None:
    """Parse an ``index.theme`` file; ``None`` when it is unreadable or has no theme section."""
    parser = configparser.ConfigParser(interpolation=None, strict=False, delimiters=("=",))
    parser.optionxform = str
    try:
        with path.open(encoding="utf-8", errors="replace") as handle:
            parser.read_file(handle, source=str(path))
    except (OSError, configparser.Error) as exc:
        logger.debug("ignoring theme index %s: %s", path, exc)
        return None
    if not parser.has_section("Icon Theme"):
        return None

    theme = parser["Icon Theme"]
    names = _split_list(theme.get("Directories", ""))
    names.extend(_split_list(theme.get("ScaledDirectories", "")))
    directories: list[ThemeDirectory] = []
    for name in dict.fromkeys(names):
        if not parser.has_section(name):
            continue
        section = parser[name]
        size = _int_option(section, "Size", 0)
        if size <= 0:
            continue
        directories.append(
            ThemeDirectory(
                path=name,
                size=size,
                kind=section.get("Type", "Threshold").strip() or "Threshold",
                scale=_int_option(section, "Scale", 1),
                min_size=_int_option(section, "MinSize", size),
                max_size=_int_option(section, "MaxSize", size),
                threshold=_int_option(section, "Threshold", 2),
            )
        )
    return ThemeIndex(directories=tuple(directories), inherits=tuple(_split_list(theme.get("Inherits", ""))))


def load_theme_index(theme: str) -> ThemeIndex | None:
    """Return the index of the first base directory that ships one for ``theme``."""
    if theme in _THEME_INDEX_CACHE:
        return _THEME_INDEX_CACHE[theme]
    index: ThemeIndex | None = None
    for base in icon_base_dirs():
        candidate = base / theme / THEME_INDEX_FILENAME
        if candidate.is_file():
            index = parse_theme_index(candidate)
            if index is not None:
                break
    _THEME_INDEX_CACHE[theme] = index
    return index


def theme_chain(theme: str | None) -> list[str]:
    """Themes to search: ``theme``, its ``Inherits=`` depth-first, then ``hicolor``."""
    chain: list[str] = []
    pending = [theme] if theme else []
    while pending:
        name = pending.pop(0)
        if name in chain or name == FALLBACK_THEME:
            continue
        chain.append(name)
        index = load_theme_index(name)
        if index is not None:
            pending[0:0] = index.inherits
    chain.append(FALLBACK_THEME)
    return chain


def _guess_directory(relative: Path) -> ThemeDirectory:
    """Infer size and type from a path like ``48x48/apps`` or ``apps/48``."""
    for part in relative.parts:
        if part == "scalable":
            return ThemeDirectory(path=str(relative), size=0, kind="Scalable", min_size=1, max_size=1 << 16)
        match = _SIZE_DIR_RE.match(part)
        if match:
            return ThemeDirectory(
                path=str(relative),
                size=int(match.group(1)),
                kind="Fixed",
                scale=int(match.group(2) or 1),
            )
    return ThemeDirectory(path=str(relative), size=0, kind="Fixed")


def _find_in_theme(theme_dir: Path, name: str, size: int, index: ThemeIndex | None) -> Path | None:
    if not theme_dir.is_dir():
        return None
    found: list[tuple[tuple[int, int, int], str, Path]] = []
    if index is not None and index.directories:
        for directory in index.directories:
            for extension in ICON_EXTENSIONS:
                path = theme_dir / directory.path / f"{name}{extension}"
                if path.is_file():
                    found.append((directory.rank(size), str(path), path))
    else:
        for extension in ICON_EXTENSIONS:
            for path in theme_dir.glob(f"*/*/{name}{extension}"):
                directory = _guess_directory(path.parent.relative_to(theme_dir))
                found.append((directory.rank(size), str(path), path))
    if not found:
        return None
    found.sort(key=lambda item: (item[0], item[1]))
    return found[0][2]


def strip_icon_extension(name: str) -> str:
    """``firefox.png`` -> ``firefox``; other names are returned unchanged."""
    stem, extension = os.path.splitext(name)
    if stem and extension.lower() in STRIPPED_EXTENSIONS:
        return stem
    return name


def find_icon_path(name: str, theme: str | None = None, size: int = 32) -> Path | None:
    """Locate the file for icon ``name`` in ``theme`` (then ``hicolor``) or pixmaps."""
    cache_key = (name, theme, size)
    if cache_key in _ICON_PATH_CACHE:
        return _ICON_PATH_CACHE[cache_key]

    lookup_name = strip_icon_extension(name)
    result: Path | None = None
    for theme_name in theme_chain(theme):
        index = load_theme_index(theme_name)
        for base in icon_base_dirs():
            result = _find_in_theme(base / theme_name, lookup_name, size, index)
            if result is not None:
                break
        if result is not None:
            break
    if result is None:
        for extension in ICON_EXTENSIONS:
            candidate = PIXMAPS_DIR / f"{lookup_name}{extension}"
            if candidate.is_file():
                result = candidate
                break

    _ICON_PATH_CACHE[cache_key] = result
    return result


def resolve_icon(icon_value: str, theme: str | None = None, size: int = 32) -> IconRef:
    """Turn a desktop entry ``Icon=`` value into an ``IconRef``.

    Absolute paths are used as-is when they exist. Names go through theme
    lookup. Anything unresolved becomes the generic executable icon, or that
    icon's bare name when no theme ships it.
    """
    icon_value = icon_value.strip()
    if icon_value:
        as_path = Path(icon_value)
        if as_path.is_absolute():
            if as_path.is_file():
                return icon_ref_for_path(as_path)
        else:
            found = find_icon_path(icon_value, theme, size)
            if found is not None:
                return icon_ref_for_path(found)
        logger.debug("icon %r not found, using generic icon", icon_value)

    generic = find_icon_path(GENERIC_ICON_NAME, theme, size)
    if generic is not None:
        return icon_ref_for_path(generic)
    return VectorPath(Path(GENERIC_ICON_NAME))
