"""Icon-theme lookup tests using a temporary icon tree."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from astatine.catalog import icons
from astatine.catalog.icons import GENERIC_ICON_NAME, clear_icon_cache, find_icon_path, resolve_icon
from astatine.catalog.types import RasterPath, VectorPath


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"icon")
    return path


class IconLookupTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_icon_cache()
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.share = self.root / "share"
        self.icons = self.share / "icons"
        patches = [
            mock.patch.dict(
                os.environ,
                {"XDG_DATA_HOME": str(self.share), "XDG_DATA_DIRS": str(self.root / "system")},
            ),
            mock.patch("pathlib.Path.home", return_value=self.root / "home"),
            mock.patch.object(icons, "PIXMAPS_DIR", self.root / "pixmaps"),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        clear_icon_cache()
        self._tmp.cleanup()

    def test_exact_size_directory_wins(self) -> None:
        png = _touch(self.icons / "hicolor" / "48x48" / "apps" / "gimp.png")
        _touch(self.icons / "hicolor" / "scalable" / "apps" / "gimp.svg")

        self.assertEqual(find_icon_path("gimp", size=48), png)

    def test_scalable_preferred_over_other_sizes(self) -> None:
        _touch(self.icons / "hicolor" / "48x48" / "apps" / "gimp.png")
        svg = _touch(self.icons / "hicolor" / "scalable" / "apps" / "gimp.svg")

        self.assertEqual(find_icon_path("gimp", size=32), svg)
        self.assertEqual(resolve_icon("gimp", size=32), VectorPath(svg))

    def test_configured_theme_searched_before_hicolor(self) -> None:
        _touch(self.icons / "hicolor" / "32x32" / "apps" / "term.png")
        themed = _touch(self.icons / "Papirus" / "32x32" / "apps" / "term.svg")

        self.assertEqual(find_icon_path("term", theme="Papirus", size=32), themed)

    def test_pixmaps_used_when_no_theme_has_icon(self) -> None:
        pixmap = _touch(self.root / "pixmaps" / "legacy.xpm")

        self.assertEqual(resolve_icon("legacy"), RasterPath(pixmap))

    def test_missing_icon_falls_back_to_generic_icon(self) -> None:
        generic = _touch(self.icons / "hicolor" / "32x32" / "mimetypes" / f"{GENERIC_ICON_NAME}.png")

        self.assertEqual(resolve_icon("does-not-exist"), RasterPath(generic))
        self.assertEqual(resolve_icon(""), RasterPath(generic))

    def test_missing_absolute_path_falls_back_to_generic_name(self) -> None:
        icon = resolve_icon(str(self.root / "gone.png"))

        self.assertEqual(icon, VectorPath(Path(GENERIC_ICON_NAME)))

    def _write_index(self, theme: str, text: str) -> None:
        index = self.icons / theme / "index.theme"
        index.parent.mkdir(parents=True, exist_ok=True)
        index.write_text(text, encoding="utf-8")

    def test_context_then_size_layout_without_index(self) -> None:
        _touch(self.icons / "Breeze" / "apps" / "32" / "term.png")
        wanted = _touch(self.icons / "Breeze" / "apps" / "48" / "term.png")

        self.assertEqual(find_icon_path("term", theme="Breeze", size=48), wanted)

    def test_index_theme_directories_decide_sizes(self) -> None:
        self._write_index(
            "Custom",
            "[Icon Theme]\n"
            "Name=Custom\n"
            "Directories=apps/16,apps/scalable\n"
            "\n"
            "[apps/16]\n"
            "Size=16\n"
            "Type=Fixed\n"
            "\n"
            "[apps/scalable]\n"
            "Size=64\n"
            "Type=Scalable\n"
            "MinSize=8\n"
            "MaxSize=512\n",
        )
        _touch(self.icons / "Custom" / "apps" / "16" / "edit.png")
        svg = _touch(self.icons / "Custom" / "apps" / "scalable" / "edit.svg")
        _touch(self.icons / "Custom" / "extra" / "22" / "edit.png")

        self.assertEqual(find_icon_path("edit", theme="Custom", size=22), svg)
        self.assertEqual(resolve_icon("edit", theme="Custom", size=22), VectorPath(svg))

    def test_inherited_theme_searched_before_hicolor(self) -> None:
        self._write_index("Custom", "[Icon Theme]\nName=Custom\nInherits=Base\n")
        _touch(self.icons / "hicolor" / "32x32" / "apps" / "mail.png")
        inherited = _touch(self.icons / "Base" / "32x32" / "apps" / "mail.png")

        self.assertEqual(icons.theme_chain("Custom"), ["Custom", "Base", "hicolor"])
        self.assertEqual(find_icon_path("mail", theme="Custom"), inherited)

    def test_icon_value_with_extension_is_looked_up_by_name(self) -> None:
        png = _touch(self.icons / "hicolor" / "32x32" / "apps" / "firefox.png")
        svg = _touch(self.icons / "hicolor" / "scalable" / "apps" / "gimp.svg")

        self.assertEqual(resolve_icon("firefox.png"), RasterPath(png))
        self.assertEqual(resolve_icon("gimp.svg"), VectorPath(svg))
        self.assertEqual(icons.strip_icon_extension("org.gnome.Nautilus"), "org.gnome.Nautilus")

    def test_lookups_are_cached_until_cleared(self) -> None:
        png = _touch(self.icons / "hicolor" / "32x32" / "apps" / "cached.png")
        self.assertEqual(find_icon_path("cached"), png)

        png.unlink()
        self.assertEqual(find_icon_path("cached"), png)

        clear_icon_cache()
        self.assertIsNone(find_icon_path("cached"))


if __name__ == "__main__":
    unittest.main()
