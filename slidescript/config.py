"""
Layout and rendering configuration.

One :class:`LayoutConfig` is built per viewport size from a theme and passed
explicitly to the metrics provider, the layout engine and the renderers.
"""
from dataclasses import dataclass, field, replace
from typing import Dict

from .css_utils import CSSParser
from .models import FontSize

DEFAULT_WIDTH = 854
DEFAULT_HEIGHT = 480  # 16:9

FONT_SIZE_VARIABLES = {
    FontSize.HUGE: "font-huge",
    FontSize.TITLE: "font-title",
    FontSize.NORMAL: "font-normal",
    FontSize.SMALL: "font-small",
}

DEFAULT_FONT_SIZES = {
    FontSize.HUGE: 40.0,
    FontSize.TITLE: 25.0,
    FontSize.NORMAL: 18.0,
    FontSize.SMALL: 15.0,
}


@dataclass(frozen=True)
class LayoutConfig:
    """
    Everything the layout engine and renderers need besides the tree itself.
    """
    viewport_width: int = DEFAULT_WIDTH
    viewport_height: int = DEFAULT_HEIGHT
    font_sizes: Dict[FontSize, float] = field(default_factory=lambda: dict(DEFAULT_FONT_SIZES))  # px
    font_family: str = "DejaVu Serif"
    font_file: str = "DejaVuSerif.ttf"
    box_padding: float = 0.025  # fraction of viewport width
    image_scale: float = 0.9  # fraction of box width
    text_color: str = "#000000"
    background_color: str = "#ffffff"
    end_text: str = "End of presentation."
    end_text_color: str = "#ffffff"
    end_background_color: str = "#000000"
    end_font_scale: float = 0.03  # fraction of viewport width

    def __post_init__(self):
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise ValueError(f"Invalid viewport size: {self.viewport_width}x{self.viewport_height}")

    def font_px(self, font_size: FontSize) -> float:
        """Pixel size of the font used for *font_size* text."""
        return self.font_sizes[font_size]

    def with_viewport(self, width: int, height: int) -> "LayoutConfig":
        """Same settings for another viewport size (window resize)."""
        return replace(self, viewport_width=width, viewport_height=height)

    @classmethod
    def from_theme(cls, theme: str = "default", width: int = DEFAULT_WIDTH,
                   height: int = DEFAULT_HEIGHT) -> "LayoutConfig":
        """
        Build a configuration from a CSS theme.

        Raises:
            FileNotFoundError: unknown theme
            ValueError: theme missing a required variable
        """
        css = CSSParser(theme)
        font_sizes = {size: css.get_px_value(var) for size, var in FONT_SIZE_VARIABLES.items()}

        return cls(
            viewport_width=width,
            viewport_height=height,
            font_sizes=font_sizes,
            font_family=css.get_string_value("slide-font-family"),
            font_file=css.get_string_value("slide-font-file"),
            box_padding=css.get_float_value("box-padding"),
            image_scale=css.get_float_value("image-scale"),
            end_font_scale=css.get_float_value("end-font-scale"),
            text_color=css.get_color_value("body") or cls.text_color,
            background_color=css.get_color_value("body", "background-color") or cls.background_color,
            end_text_color=css.get_color_value(r"\.end-slide") or cls.end_text_color,
            end_background_color=(css.get_color_value(r"\.end-slide", "background-color")
                                  or cls.end_background_color),
        )
