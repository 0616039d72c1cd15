"""Catalog exports: candidate types and the desktop-entry loader."""

from __future__ import annotations

from .desktop import DesktopEntry, clean_exec_line, default_application_dirs, load_catalog, parse_desktop_file
from .icons import GENERIC_ICON_NAME, clear_icon_cache, find_icon_path, resolve_icon
from .types import (
    Candidate,
    Catalog,
    IconRef,
    RasterPath,
    VectorPath,
    build_catalog,
    icon_ref_for_path,
    verify_catalog,
)

__all__ = [
    "Candidate",
    "Catalog",
    "DesktopEntry",
    "GENERIC_ICON_NAME",
    "IconRef",
    "RasterPath",
    "VectorPath",
    "build_catalog",
    "clean_exec_line",
    "clear_icon_cache",
    "default_application_dirs",
    "find_icon_path",
    "icon_ref_for_path",
    "load_catalog",
    "parse_desktop_file",
    "resolve_icon",
    "verify_catalog",
]
