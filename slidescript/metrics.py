"""Font metrics used by the layout engine and renderers."""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Tuple

from PIL import ImageFont

from .config import LayoutConfig
from .models import FontSize

logger = logging.getLogger(__name__)

_missing_fonts = set()


def load_font(font_file: str, px: float) -> ImageFont.ImageFont:
    """
    Theme font at *px* pixels, or Pillow's bundled default font when the
    theme font is not installed (warned about once per file).
    """
    size = max(1, int(round(px)))
    try:
        return ImageFont.truetype(font_file, size)
    except OSError:
        if font_file not in _missing_fonts:
            logger.warning(f"⚠️ Font '{font_file}' not found, using Pillow's default font")
            _missing_fonts.add(font_file)
        return ImageFont.load_default(size=size)


class FontMetrics(ABC):
    """
    Measurement interface the layout engine depends on.

    Widths are in pixels.  ``line_height`` and ``ascent`` are divided by the
    height of the region they are measured against, so passing the viewport
    height gives viewport-relative values and passing a box height gives
    box-relative ones.
    """

    @abstractmethod
    def advance_width(self, char: str, font_size: FontSize) -> float:
        ...

    @abstractmethod
    def font_height(self, font_size: FontSize) -> float:
        """Line height in pixels."""

    @abstractmethod
    def font_ascent(self, font_size: FontSize) -> float:
        """Ascent above the baseline in pixels."""

    def string_width(self, text: str, font_size: FontSize) -> float:
        # Sum of advances, so the width of a joined line equals the sum of
        # its words and spaces.
        return sum(self.advance_width(char, font_size) for char in text)

    def line_height(self, font_size: FontSize, box_height_px: float) -> float:
        return self.font_height(font_size) / box_height_px

    def ascent(self, font_size: FontSize, box_height_px: float) -> float:
        return self.font_ascent(font_size) / box_height_px


class PillowFontMetrics(FontMetrics):
    """
    Metrics from the theme's TrueType font, loaded through Pillow.

    Falls back to Pillow's bundled default font when the theme font is not
    installed, so layout works on any machine (with slightly different
    metrics).
    """

    def __init__(self, config: LayoutConfig, debug: bool = False):
        self.config = config
        self.debug = debug
        self._fonts: Dict[FontSize, ImageFont.ImageFont] = {}
        self._advance_cache: Dict[Tuple[str, FontSize], float] = {}
        self._vertical_cache: Dict[FontSize, Tuple[float, float]] = {}

    def font(self, font_size: FontSize) -> ImageFont.ImageFont:
        if font_size not in self._fonts:
            self._fonts[font_size] = load_font(self.config.font_file, self.config.font_px(font_size))
        return self._fonts[font_size]

    def advance_width(self, char: str, font_size: FontSize) -> float:
        key = (char, font_size)
        if key not in self._advance_cache:
            self._advance_cache[key] = float(self.font(font_size).getlength(char))
        return self._advance_cache[key]

    def _vertical_metrics(self, font_size: FontSize) -> Tuple[float, float]:
        if font_size not in self._vertical_cache:
            font = self.font(font_size)
            if isinstance(font, ImageFont.FreeTypeFont):
                ascent, descent = font.getmetrics()
            else:
                # Bitmap fonts have no vertical metrics; approximate from a tall glyph pair.
                _, top, _, bottom = font.getbbox("Ag")
                ascent, descent = bottom - top, 0
            self._vertical_cache[font_size] = (float(ascent), float(descent))
            if self.debug:
                logger.debug(f"{font_size.value}: ascent={ascent} descent={descent}")
        return self._vertical_cache[font_size]

    def font_height(self, font_size: FontSize) -> float:
        ascent, descent = self._vertical_metrics(font_size)
        return ascent + descent

    def font_ascent(self, font_size: FontSize) -> float:
        return self._vertical_metrics(font_size)[0]
