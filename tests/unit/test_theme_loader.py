"""Test theme loader and theme-driven configuration."""

import pytest

from slidescript.config import LayoutConfig
from slidescript.css_utils import CSSParser, hex_to_rgb
from slidescript.models import FontSize
from slidescript.theme_loader import get_css, list_available_themes, validate_theme


def test_get_css_default():
    """Test that default theme loads and returns CSS content."""
    css = get_css("default")

    assert isinstance(css, str)
    assert ":root" in css
    assert "--font-normal" in css
    assert "body" in css


def test_get_css_dark():
    css = get_css("dark")
    assert "#1a1a1a" in css  # Dark background color


def test_get_css_invalid_theme():
    """Test that invalid theme names raise appropriate errors."""
    with pytest.raises(FileNotFoundError):
        get_css("nonexistent")

    # Invalid characters (path traversal attempt)
    with pytest.raises(ValueError):
        get_css("../evil")

    with pytest.raises(ValueError):
        get_css("theme/../../evil")


def test_list_available_themes():
    themes = list_available_themes()
    assert "default" in themes
    assert "dark" in themes
    assert themes == sorted(themes)


def test_validate_theme():
    assert validate_theme("default")
    assert validate_theme("dark")
    assert not validate_theme("nonexistent")
    assert not validate_theme("../evil")


def test_css_parser_reads_variables():
    css = CSSParser("default")
    assert css.get_px_value("font-huge") == 40.0
    assert css.get_float_value("box-padding") == 0.025
    assert css.get_string_value("slide-font-file") == "DejaVuSerif.ttf"
    with pytest.raises(ValueError):
        css.get_raw_value("no-such-variable")
    with pytest.raises(ValueError):
        css.get_px_value("box-padding")


def test_css_parser_does_not_confuse_color_with_background_color():
    css = CSSParser("dark")
    assert css.get_color_value("body") == "#f0f0f0"
    assert css.get_color_value("body", "background-color") == "#1a1a1a"


@pytest.mark.parametrize("value, expected", [
    ("#ffffff", (255, 255, 255)),
    ("#000", (0, 0, 0)),
    ("1a1a1a", (26, 26, 26)),
])
def test_hex_to_rgb(value, expected):
    assert hex_to_rgb(value) == expected


def test_hex_to_rgb_rejects_garbage():
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


def test_layout_config_from_theme():
    config = LayoutConfig.from_theme("default", 1024, 768)

    assert (config.viewport_width, config.viewport_height) == (1024, 768)
    assert config.font_px(FontSize.HUGE) == 40.0
    assert config.font_px(FontSize.TITLE) == 25.0
    assert config.font_px(FontSize.NORMAL) == 18.0
    assert config.font_px(FontSize.SMALL) == 15.0
    assert config.box_padding == 0.025
    assert config.image_scale == 0.9
    assert config.end_font_scale == 0.03
    assert config.background_color == "#ffffff"
    assert config.end_background_color == "#000000"
    assert config.end_text == "End of presentation."


def test_dark_theme_colors():
    config = LayoutConfig.from_theme("dark")
    assert config.background_color == "#1a1a1a"
    assert config.text_color == "#f0f0f0"
    assert config.font_file == "DejaVuSans.ttf"


def test_with_viewport_keeps_other_settings():
    config = LayoutConfig.from_theme("dark")
    resized = config.with_viewport(1280, 720)
    assert (resized.viewport_width, resized.viewport_height) == (1280, 720)
    assert resized.text_color == config.text_color
    assert (config.viewport_width, config.viewport_height) == (854, 480)


def test_invalid_viewport_is_rejected():
    with pytest.raises(ValueError):
        LayoutConfig(viewport_width=0, viewport_height=480)
