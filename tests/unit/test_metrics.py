"""Test the font metrics interface and the Pillow-backed provider."""

import pytest

from slidescript.config import LayoutConfig
from slidescript.metrics import FontMetrics, PillowFontMetrics, load_font
from slidescript.models import FontSize
from slidescript.renderer import Renderer


def test_font_metrics_is_abstract():
    with pytest.raises(TypeError):
        FontMetrics()


def test_incomplete_metrics_cannot_be_created():
    class WidthOnly(FontMetrics):
        def advance_width(self, char, font_size):
            return 1.0

    with pytest.raises(TypeError):
        WidthOnly()


def test_fixed_metrics_derived_values(metrics):
    assert metrics.string_width("abcd", FontSize.NORMAL) == pytest.approx(4 * 9)
    assert metrics.line_height(FontSize.NORMAL, 480) == pytest.approx(21.6 / 480)
    assert metrics.ascent(FontSize.NORMAL, 240) == pytest.approx(14.4 / 240)


def test_renderer_requires_every_primitive(config, metrics):
    class NoText(Renderer):
        def begin(self, output_path):
            pass

        def begin_slide(self, slide, title):
            pass

        def draw_image(self, image, source_rect, dest_rect):
            pass

        def draw_end_slide(self, text, font_px):
            pass

        def finish(self):
            pass

    with pytest.raises(TypeError):
        NoText(config, metrics)


def test_pillow_metrics_fall_back_to_default_font(caplog):
    config = LayoutConfig(font_file="no-such-font-file.ttf")
    metrics = PillowFontMetrics(config)

    assert metrics.string_width("abc", FontSize.NORMAL) > 0
    assert metrics.font_height(FontSize.NORMAL) > 0
    assert metrics.font_ascent(FontSize.NORMAL) > 0
    assert "not found" in caplog.text


def test_load_font_rounds_to_whole_pixels():
    font = load_font("another-missing-font.ttf", 17.6)
    assert font.getlength("x") > 0
