"""PNG renderer: rasterizes each slide with Pillow."""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .css_utils import hex_to_rgb
from .metrics import load_font
from .models import FontSize, ImageData, Slide
from .paths import prepare_output
from .renderer import Rect, Renderer, image_to_pil

logger = logging.getLogger(__name__)


class PNGRenderer(Renderer):
    """
    Writes ``slide-001.png``, ``slide-002.png``, ... into an output directory,
    one image per visible slide (plus the end slide) at viewport resolution.
    """

    def begin(self, output_path: Path) -> None:
        self.output_dir = prepare_output(output_path, is_dir=True)
        self.written: List[Path] = []
        self.canvas: Optional[Image.Image] = None
        self.draw: Optional[ImageDraw.ImageDraw] = None
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def _new_canvas(self, background_color: str) -> None:
        self._flush()
        size = (self.viewport_width, self.viewport_height)
        self.canvas = Image.new("RGB", size, hex_to_rgb(background_color))
        self.draw = ImageDraw.Draw(self.canvas)

    def _flush(self) -> None:
        if self.canvas is None:
            return
        path = self.output_dir / f"slide-{len(self.written) + 1:03d}.png"
        self.canvas.save(path)
        self.written.append(path)
        self.canvas = None
        self.draw = None

    def _font(self, px: float) -> ImageFont.ImageFont:
        size = max(1, int(round(px)))
        if size not in self._fonts:
            self._fonts[size] = load_font(self.config.font_file, size)
        return self._fonts[size]

    def begin_slide(self, slide: Slide, title: Optional[str]) -> None:
        self._new_canvas(self.config.background_color)

    def draw_text(self, content: str, position: Tuple[float, float], font_px: float,
                  font_size: FontSize) -> None:
        font = self._font(font_px)
        # "ls": left end of the baseline
        self.draw.text(position, content, font=font, fill=hex_to_rgb(self.config.text_color), anchor="ls")

    def draw_image(self, image: ImageData, source_rect: Rect, dest_rect: Rect) -> None:
        x, y, width, height = dest_rect
        size = (max(1, int(round(width))), max(1, int(round(height))))
        picture = image_to_pil(image, source_rect).resize(size, Image.LANCZOS)
        self.canvas.paste(picture, (int(round(x)), int(round(y))), picture)

    def draw_end_slide(self, text: str, font_px: float) -> None:
        self._new_canvas(self.config.end_background_color)
        font = self._font(font_px)
        center = (self.viewport_width / 2, self.viewport_height / 2)
        self.draw.text(center, text, font=font, fill=hex_to_rgb(self.config.end_text_color), anchor="mm")

    def finish(self) -> Path:
        self._flush()
        logger.info(f"Wrote {len(self.written)} PNG slides to {self.output_dir}")
        return self.output_dir
