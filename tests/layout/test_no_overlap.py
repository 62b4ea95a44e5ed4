#!/usr/bin/env python3
"""
Test that laid-out boxes never overlap and that every element stays inside
its box, for a deck mixing rows, columns, templates and images.
"""

import itertools

import pytest

from slidescript.models import Image, Text

EPS = 1e-9

DECK = '''
template "frame"
box "heading", stack-vertical, align-center
box "left", stack-horizontal, align-left
box "right", stack-horizontal, align-right
define "heading"
text title "Quarterly review"
end
end

slide "overview"
uses "frame"
define "left"
text normal "Revenue grew in every region this quarter, led by strong demand in the north."
text small "Figures are preliminary."
end
define "right"
image "chart.png"
end
end

slide "details"
box "top", stack-vertical, align-left
box "a", stack-horizontal, align-left
box "b", stack-horizontal, align-center
box "c", stack-horizontal, align-right
box "bottom", stack-vertical, align-right
define "top"
text huge "Details"
end
define "a"
text normal "Column one has a fairly long sentence that needs wrapping."
end
define "b"
text normal "Column two"
end
define "c"
text normal "Three"
end
define "bottom"
text small "Thanks for reading"
end
end
'''


def rectangles_overlap(first, second):
    """Check if two (x, y, w, h) rectangles overlap."""
    x1, y1, w1, h1 = first
    x2, y2, w2, h2 = second
    if x1 + w1 <= x2 + EPS or x2 + w2 <= x1 + EPS:
        return False
    if y1 + h1 <= y2 + EPS or y2 + h2 <= y1 + EPS:
        return False
    return True


@pytest.fixture
def laid_out(parser, engine, make_png):
    make_png("chart.png", size=(300, 200))
    return engine.apply(parser.parse(DECK))


def test_boxes_do_not_overlap(laid_out):
    for slide in laid_out:
        for boxes in [slide.boxes()] + [nested.boxes() for nested in slide.nested_slides()]:
            rects = [(b.x, b.y, b.width, b.height) for b in boxes]
            for first, second in itertools.combinations(rects, 2):
                assert not rectangles_overlap(first, second), f"{first} overlaps {second}"


def test_boxes_stay_inside_viewport(laid_out):
    for slide in laid_out:
        for box in slide.iter_boxes():
            assert box.x >= 0 and box.y >= 0
            assert box.x + box.width <= 1 + 1e-6
            assert box.y + box.height <= 1 + 1e-6


def test_elements_stay_inside_their_box(laid_out, metrics):
    for slide in laid_out:
        for box in slide.iter_boxes():
            box_w_px = box.width * 854
            for element in box.children:
                if isinstance(element, Text):
                    width = metrics.string_width(element.content, element.font_size) / box_w_px
                    assert element.x >= 0
                    assert element.x + width <= 1 + 1e-6
                    assert 0 < element.y <= 1
                elif isinstance(element, Image):
                    assert element.x >= 0 and element.y >= 0
                    assert element.x + element.rwidth <= 1 + 1e-6
                    assert element.y + element.rheight <= 1 + 1e-6


def test_text_lines_do_not_overlap(laid_out):
    font_px = {"huge": 40, "title": 25, "normal": 18, "small": 15}
    for slide in laid_out:
        for box in slide.iter_boxes():
            texts = box.texts()
            for upper, lower in zip(texts, texts[1:]):
                smaller = min(font_px[upper.font_size.value], font_px[lower.font_size.value])
                assert lower.y - upper.y >= 1.2 * smaller / (box.height * 480) - 1e-9
