"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path

import pytest
from recyclebin.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_bundled_theme_path,
    get_rich_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.recycled == "#f5b332"
        assert colors.error == "#f53263"

    def test_short_hex_accepted(self) -> None:
        """Three-digit hex codes are valid."""
        assert ThemeColors(muted="#abc").muted == "#abc"

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects non-hex digits."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_unknown_color_rejected(self) -> None:
        """Unknown color names are not allowed."""
        with pytest.raises(ValueError):
            ThemeColors(sparkle="#ffffff")  # type: ignore[call-arg]


class TestLoadTheme:
    """Tests for theme file loading."""

    def test_bundled_theme_matches_defaults(self) -> None:
        """The shipped theme.toml carries the model defaults."""
        colors = _load_toml_colors(Path(get_bundled_theme_path()))

        assert colors is not None
        assert ThemeColors(**colors) == ThemeColors()

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file yields None."""
        assert _load_toml_colors(tmp_path / "theme.toml") is None

    def test_broken_file(self, tmp_path: Path) -> None:
        """Unparseable TOML yields None."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n")

        assert _load_toml_colors(path) is None

    def test_user_override(self, bin_root: Path) -> None:
        """Colors in the quarantine root override the bundled ones."""
        bin_root.mkdir()
        (bin_root / "theme.toml").write_text('[colors]\nrecycled = "#123456"\n')

        colors = load_theme()

        assert colors.recycled == "#123456"
        assert colors.restored == ThemeColors().restored

    def test_invalid_override_falls_back(self, bin_root: Path) -> None:
        """An invalid user color falls back to the defaults."""
        bin_root.mkdir()
        (bin_root / "theme.toml").write_text('[colors]\nrecycled = "red"\n')

        assert load_theme() == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_lifecycle_styles(self) -> None:
        """The Rich theme defines the styles the CLI uses."""
        theme = get_rich_theme(ThemeColors())

        assert isinstance(theme, Theme)
        for name in ("recycled", "restored", "purged", "kind.directory", "bold_header"):
            assert name in theme.styles
