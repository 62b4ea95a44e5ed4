#!/usr/bin/env python3
"""Layout engine: box sizing, row packing, word wrap and element placement."""

import logging
from typing import List, Sequence

from .config import LayoutConfig
from .errors import LayoutError
from .metrics import FontMetrics
from .models import Box, FontSize, Image, Slide, SlideList, Text, TextAlign

logger = logging.getLogger(__name__)

EPSILON = 1e-6


def _pack_rows(boxes: Sequence[Box]) -> List[List[Box]]:
    """
    Group horizontal boxes into rows.

    A row is a maximal run of consecutive horizontal boxes; a vertical box or
    the end of the slide closes it.
    """
    rows: List[List[Box]] = []
    current: List[Box] = []
    for box in boxes:
        if box.is_horizontal():
            current.append(box)
        elif current:
            rows.append(current)
            current = []
    if current:
        rows.append(current)
    return rows


def _aligned_x(align: TextAlign, width: float, padding: float) -> float:
    if align is TextAlign.LEFT:
        return padding
    if align is TextAlign.CENTER:
        return 0.5 - width / 2
    return 1.0 - width - padding


class LayoutEngine:
    """
    Assigns normalized geometry to every box and element of a slideshow.

    Each slide is laid out in three passes (nested slides first):

    1. measure - vertical boxes take the full width, their text is wrapped
       and their height follows their content;
    2. row packing - consecutive horizontal boxes share a row evenly, and
       rows share the height the vertical boxes leave over;
    3. position - boxes are placed with a cursor, then each box places its
       own text lines and images.

    Wrapping mutates the tree (lines are split and carried over), so running
    the engine again at the same viewport size is a no-op geometrically.
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

    def apply(self, slide_list: SlideList) -> SlideList:
        """Lay out every top-level slide and template in place."""
        for slide in slide_list:
            self.layout_slide(slide)
        if self.debug:
            logger.debug(f"Laid out {len(slide_list)} slides at {self.viewport_width}x{self.viewport_height}")
        return slide_list

    def layout_slide(self, slide: Slide) -> None:
        """Run the measure, row-packing and position passes over *slide*."""
        for nested in slide.nested_slides():
            self.layout_slide(nested)

        boxes = slide.boxes()
        if not boxes:
            return

        # Pass 1: measure
        total_vertical_height = 0.0
        for box in boxes:
            if box.is_vertical():
                box.width = 1.0
                self.wrap_box(box)
                box.height = self.vertical_box_height(box)
                total_vertical_height += box.height
            else:
                box.height = 1.0

        leftover = 1.0 - total_vertical_height
        if leftover < -EPSILON:
            raise LayoutError(
                f"Content of slide '{slide.name}' is taller than the viewport "
                f"({total_vertical_height:.3f} of 1.0).",
                slide.line,
            )

        # Pass 2: row packing
        rows = _pack_rows(boxes)
        for row in rows:
            width = 1.0 / len(row)
            for box in row:
                box.width = width
                self.wrap_box(box)

        if rows:
            row_height = leftover / len(rows)
            if row_height <= EPSILON:
                raise LayoutError(
                    f"No room left for horizontal boxes on slide '{slide.name}'.",
                    rows[0][0].line,
                )
            for row in rows:
                for box in row:
                    box.height = row_height
        else:
            # Without rows the vertical boxes share the remaining space.
            vertical = [box for box in boxes if box.is_vertical()]
            share = leftover / len(vertical)
            for box in vertical:
                box.height += share

        # Pass 3: position
        row_ends = {id(row[-1]) for row in rows}
        cur_x = 0.0
        cur_y = 0.0
        for box in boxes:
            box.x = cur_x
            box.y = cur_y
            self.position_elements(box)
            if box.is_vertical():
                cur_y += box.height
            else:
                cur_x += box.width
                if id(box) in row_ends:
                    cur_x = 0.0
                    cur_y += box.height

        for box in boxes:
            self._check_bounds(box)

        if self.debug:
            for box in boxes:
                logger.debug(f"  box {box.name!r}: x={box.x:.3f} y={box.y:.3f} "
                             f"w={box.width:.3f} h={box.height:.3f} ({len(box.children)} elements)")

    def _check_bounds(self, box: Box) -> None:
        if box.x + box.width > 1.0 + EPSILON or box.y + box.height > 1.0 + EPSILON:
            raise LayoutError(
                f"Box '{box.name}' does not fit in the viewport "
                f"(x={box.x:.3f} w={box.width:.3f} y={box.y:.3f} h={box.height:.3f}).",
                box.line,
            )

    # ------------------------------------------------------------------
    # Word wrap
    # ------------------------------------------------------------------

    def text_width(self, content: str, font_size: FontSize) -> float:
        """Width of *content*, as a fraction of the viewport width."""
        return self.metrics.string_width(content, font_size) / self.viewport_width

    def wrap_box(self, box: Box) -> None:
        """
        Greedily break every text line of *box* that is wider than the box.

        Words that do not fit are carried to the next text line of the box,
        or to a new line inserted right after the current one.  The cursor
        stays on a line after splitting it so the shortened line is checked
        again.

        Raises:
            LayoutError: if a single word is wider than the box
        """
        available = box.width - 2 * self.config.box_padding
        index = 0
        while index < len(box.children):
            element = box.children[index]
            if not isinstance(element, Text):
                index += 1
                continue

            element.size = self.config.font_px(element.font_size) / self.viewport_width
            if self.text_width(element.content, element.font_size) <= available + EPSILON:
                index += 1
                continue

            words = element.content.split()
            if not words:
                element.content = ""
                index += 1
                continue
            widest = max(words, key=lambda word: self.text_width(word, element.font_size))
            if self.text_width(widest, element.font_size) > available + EPSILON:
                raise LayoutError(
                    f"Single word '{widest}' in text is wider than box width. In box: {box.name}",
                    element.line,
                )

            taken = self._fit_words(words, element.font_size, available)
            element.content = " ".join(words[:taken])
            remainder = " ".join(words[taken:])
            if not remainder:
                # Only redundant whitespace was removed.
                continue

            following = box.children[index + 1] if index + 1 < len(box.children) else None
            if isinstance(following, Text):
                following.content = f"{remainder} {following.content}" if following.content else remainder
            else:
                box.insert(index + 1, Text(content=remainder, font_size=element.font_size, line=element.line))

            if self.debug:
                logger.debug(f"Wrapped line in box {box.name!r}: {element.content!r} | {remainder!r}")

    def _fit_words(self, words: List[str], font_size: FontSize, available: float) -> int:
        """Number of leading *words* that fit on one line (at least one)."""
        space = self.metrics.advance_width(" ", font_size) / self.viewport_width
        width = 0.0
        taken = 0
        for word in words:
            candidate = self.text_width(word, font_size) if taken == 0 else width + space + self.text_width(word, font_size)
            if taken > 0 and candidate >= available:
                break
            width = candidate
            taken += 1
        return max(taken, 1)

    # ------------------------------------------------------------------
    # Measurement and placement
    # ------------------------------------------------------------------

    def vertical_box_height(self, box: Box) -> float:
        """Content height of *box* (padding included), as a fraction of the viewport height."""
        padding = self.config.box_padding * self.viewport_width / self.viewport_height
        height = 2 * padding
        for element in box.children:
            if isinstance(element, Text):
                height += self.metrics.line_height(element.font_size, self.viewport_height)
            elif isinstance(element, Image):
                render_width_px = self.config.image_scale * box.width * self.viewport_width
                height += render_width_px / element.aspect_ratio / self.viewport_height
        return height

    def position_elements(self, box: Box) -> None:
        """
        Place the elements of *box* in box-relative coordinates.

        Lines and images stack from the top, a lone element is centered
        vertically, and alignment decides the horizontal position.  Images
        keep their aspect ratio and shrink to the room left in the box.
        """
        box_width_px = box.width * self.viewport_width
        box_height_px = box.height * self.viewport_height
        padding_px = self.config.box_padding * self.viewport_width
        pad_x = padding_px / box_width_px
        pad_y = padding_px / box_height_px
        box_aspect = box_width_px / box_height_px
        lone = len(box.children) == 1

        current_y = pad_y
        for element in box.children:
            if isinstance(element, Text):
                width = self.metrics.string_width(element.content, element.font_size) / box_width_px
                line_height = self.metrics.line_height(element.font_size, box_height_px)
                ascent = self.metrics.ascent(element.font_size, box_height_px)
                if lone:
                    element.y = 0.5 - line_height / 2 + ascent
                else:
                    element.y = current_y + ascent
                    current_y += line_height
                element.x = _aligned_x(box.text_align, width, pad_x)

            elif isinstance(element, Image):
                element.rwidth = self.config.image_scale
                element.rheight = element.rwidth / element.aspect_ratio * box_aspect

                room = 1.0 - 2 * pad_y if lone else 1.0 - current_y - pad_y
                room = max(room, 0.0)
                if element.rheight > room:
                    element.rheight = room
                    element.rwidth = element.rheight * element.aspect_ratio / box_aspect

                if lone:
                    element.y = 0.5 - element.rheight / 2
                else:
                    element.y = current_y
                current_y += element.rheight
                element.x = _aligned_x(box.text_align, element.rwidth, pad_x)
