"""
Renderer base: walks a laid-out slideshow and emits drawing primitives.

Backends implement the primitives; this module owns the conversion from the
normalized layout coordinates to pixels.
"""
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image as PILImage

from .config import LayoutConfig
from .metrics import FontMetrics
from .models import Box, FontSize, Image, ImageData, Slide, SlideList, Text

logger = logging.getLogger(__name__)

Rect = Tuple[float, float, float, float]  # x, y, width, height in pixels


class Renderer(ABC):
    """
    Base class for output backends.

    Subclasses implement :meth:`begin`, :meth:`begin_slide`, :meth:`draw_text`,
    :meth:`draw_image`, :meth:`draw_end_slide` and :meth:`finish`.
    """

    def __init__(self, config: LayoutConfig, metrics: FontMetrics, debug: bool = False):
        self.config = config
        self.metrics = metrics
        self.debug = debug

    @property
    def viewport_width(self) -> int:
        return self.config.viewport_width

    @property
    def viewport_height(self) -> int:
        return self.config.viewport_height

    def render(self, slide_list: SlideList, output_path, end_slide: bool = True) -> Path:
        """
        Render every visible slide in presentation order.

        Args:
            slide_list: laid-out slideshow
            output_path: destination (file or directory, depending on backend)
            end_slide: append the closing "End of presentation." slide

        Returns:
            Path: what the backend wrote
        """
        self.begin(Path(output_path))
        slides = slide_list.presentation()
        for number, slide in enumerate(slides, start=1):
            title = slide.top_text()
            if self.debug:
                logger.debug(f"Rendering slide {number}/{len(slides)}: {title!r}")
            self.begin_slide(slide, title)
            self.draw_slide(slide)
        if end_slide:
            self.draw_end_slide(self.config.end_text, self.config.end_font_scale * self.viewport_width)
        return self.finish()

    def draw_slide(self, slide: Slide) -> None:
        for child in slide.children:
            if isinstance(child, Slide):
                self.draw_slide(child)
            else:
                self.draw_box(child)

    def draw_box(self, box: Box) -> None:
        box_x = box.x * self.viewport_width
        box_y = box.y * self.viewport_height
        box_w = box.width * self.viewport_width
        box_h = box.height * self.viewport_height

        for element in box.children:
            if isinstance(element, Text):
                if not element.content:
                    continue
                position = (box_x + element.x * box_w, box_y + element.y * box_h)
                font_px = element.size * self.viewport_width
                self.draw_text(element.content, position, font_px, element.font_size)
            elif isinstance(element, Image):
                source = (0, 0, element.width, element.height)
                dest = (
                    box_x + element.x * box_w,
                    box_y + element.y * box_h,
                    element.rwidth * box_w,
                    element.rheight * box_h,
                )
                self.draw_image(element.data, source, dest)

    # ------------------------------------------------------------------
    # Backend primitives
    # ------------------------------------------------------------------

    @abstractmethod
    def begin(self, output_path: Path) -> None:
        ...

    @abstractmethod
    def begin_slide(self, slide: Slide, title: Optional[str]) -> None:
        ...

    @abstractmethod
    def draw_text(self, content: str, position: Tuple[float, float], font_px: float,
                  font_size: FontSize) -> None:
        """Draw one line of text; *position* is the left end of its baseline."""
        ...

    @abstractmethod
    def draw_image(self, image: ImageData, source_rect: Rect, dest_rect: Rect) -> None:
        ...

    @abstractmethod
    def draw_end_slide(self, text: str, font_px: float) -> None:
        ...

    @abstractmethod
    def finish(self) -> Path:
        ...


def image_to_pil(image: ImageData, source_rect: Rect):
    """Pillow image for the *source_rect* part of a decoded buffer."""
    picture = PILImage.frombytes("RGBA", (image.width, image.height), image.pixels)
    left, top, width, height = (int(round(value)) for value in source_rect)
    if (left, top, width, height) != (0, 0, image.width, image.height):
        picture = picture.crop((left, top, left + width, top + height))
    return picture
