#!/usr/bin/env python3
"""
PowerPoint renderer for converting laid-out slides to a PPTX deck.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.text import MSO_ANCHOR, MSO_AUTO_SIZE, PP_ALIGN
from pptx.util import Inches, Pt

from .css_utils import hex_to_rgb
from .models import FontSize, ImageData, Slide
from .paths import prepare_output
from .renderer import Rect, Renderer, image_to_pil

logger = logging.getLogger(__name__)

BLANK_LAYOUT = 6


# Helper function to convert pixels to inches
def px(pixels):
    return Inches(pixels / 96)


def _rgb(hex_color: str) -> RGBColor:
    return RGBColor(*hex_to_rgb(hex_color))


class PPTXRenderer(Renderer):
    """
    Renderer writing one PowerPoint slide per visible slide.

    The deck has the viewport's proportions (96 px per inch).  Every text
    line becomes its own unwrapped text box anchored at its baseline, every
    image a picture shape; the slide title goes into the speaker notes.
    """

    def begin(self, output_path: Path) -> None:
        if output_path.suffix != ".pptx":
            output_path = output_path.with_suffix(".pptx")
        self.output_path = prepare_output(output_path)

        self.prs = Presentation()
        self.prs.slide_width = px(self.viewport_width)
        self.prs.slide_height = px(self.viewport_height)
        self.slide = None

    def _add_blank_slide(self, background_color: str):
        slide = self.prs.slides.add_slide(self.prs.slide_layouts[BLANK_LAYOUT])
        fill = slide.background.fill
        fill.solid()
        fill.fore_color.rgb = _rgb(background_color)
        return slide

    def begin_slide(self, slide: Slide, title: Optional[str]) -> None:
        self.slide = self._add_blank_slide(self.config.background_color)
        if title:
            self.slide.notes_slide.notes_text_frame.text = title

    def draw_text(self, content: str, position: Tuple[float, float], font_px: float,
                  font_size: FontSize) -> None:
        x, baseline = position
        ascent = self.metrics.font_ascent(font_size)
        width = self.metrics.string_width(content, font_size)
        height = self.metrics.font_height(font_size)

        textbox = self.slide.shapes.add_textbox(px(x), px(baseline - ascent), px(width), px(height))
        frame = textbox.text_frame
        frame.margin_left = frame.margin_right = frame.margin_top = frame.margin_bottom = 0
        frame.word_wrap = False
        frame.auto_size = MSO_AUTO_SIZE.NONE
        frame.vertical_anchor = MSO_ANCHOR.TOP

        paragraph = frame.paragraphs[0]
        run = paragraph.add_run()
        run.text = content
        run.font.size = Pt(font_px * 0.75)
        run.font.name = self.config.font_family
        run.font.color.rgb = _rgb(self.config.text_color)

    def draw_image(self, image: ImageData, source_rect: Rect, dest_rect: Rect) -> None:
        picture = image_to_pil(image, source_rect)
        stream = io.BytesIO()
        picture.save(stream, format="PNG")
        stream.seek(0)

        x, y, width, height = dest_rect
        self.slide.shapes.add_picture(stream, px(x), px(y), width=px(width), height=px(height))

    def draw_end_slide(self, text: str, font_px: float) -> None:
        slide = self._add_blank_slide(self.config.end_background_color)
        textbox = slide.shapes.add_textbox(0, 0, self.prs.slide_width, self.prs.slide_height)
        frame = textbox.text_frame
        frame.word_wrap = True
        frame.vertical_anchor = MSO_ANCHOR.MIDDLE

        paragraph = frame.paragraphs[0]
        paragraph.alignment = PP_ALIGN.CENTER
        run = paragraph.add_run()
        run.text = text
        run.font.size = Pt(font_px * 0.75)
        run.font.name = self.config.font_family
        run.font.color.rgb = _rgb(self.config.end_text_color)

    def finish(self) -> Path:
        self.prs.save(str(self.output_path))
        if self.debug:
            logger.debug(f"Saved {len(self.prs.slides)} slides to {self.output_path}")
        return self.output_path
