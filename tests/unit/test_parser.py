"""Test building the slideshow tree from source."""

import logging

import pytest

from slidescript.errors import DSLLogicError, DSLSyntaxError, ImageDecodeError
from slidescript.models import Box, FontSize, Image, Slide, StackType, Text, TextAlign


BASIC = '''
slide "intro"
box "title", stack-vertical, align-center
box "body", stack-vertical, align-left
define "title"
text huge "Hello"
end
define "body"
text normal "First line"
text small "Second line"
end
end
'''


def test_builds_slides_boxes_and_text(parser):
    slides = parser.parse(BASIC)

    assert len(slides) == 1
    slide = slides[0]
    assert slide.name == "intro"
    assert slide.visible
    assert [box.name for box in slide.boxes()] == ["title", "body"]

    title, body = slide.boxes()
    assert title.stack_type is StackType.VERTICAL
    assert title.text_align is TextAlign.CENTER
    assert body.text_align is TextAlign.LEFT
    assert [(t.content, t.font_size) for t in title.texts()] == [("Hello", FontSize.HUGE)]
    assert [t.content for t in body.texts()] == ["First line", "Second line"]


def test_children_keep_document_order(parser):
    slides = parser.parse(BASIC)
    body = slides[0].boxes()[1]
    assert all(isinstance(child, Text) for child in body.children)
    assert body.children[0].line < body.children[1].line


def test_templates_are_parsed_but_not_presented(parser):
    slides = parser.parse('template "layout"\nbox "b" stack-vertical align-left\nend\n'
                          'slide "s"\nuses "layout"\nend\n')
    assert [slide.name for slide in slides] == ["layout", "s"]
    assert slides[0].is_template
    assert [slide.name for slide in slides.presentation()] == ["s"]


def test_short_lines_are_skipped(parser):
    slides = parser.parse('x\n\n   \nslide "a"\nend\n')
    assert len(slides) == 1


def test_end_closes_box_then_slide(parser):
    slides = parser.parse('slide "a"\nbox "b" stack-vertical align-left\ndefine "b"\nend\nend\n')
    assert len(slides) == 1


def test_define_replaces_current_box(parser):
    source = '''slide "a"
box "one" stack-vertical align-left
box "two" stack-vertical align-left
define "one"
define "two"
text normal "goes to two"
end
end
'''
    one, two = parser.parse(source)[0].boxes()
    assert one.children == []
    assert [t.content for t in two.texts()] == ["goes to two"]


def test_image_statement_decodes_file(parser, make_png):
    name = make_png(size=(40, 20))
    slides = parser.parse(f'slide "a"\nbox "b" stack-vertical align-left\ndefine "b"\nimage "{name}"\nend\nend\n')
    image = slides[0].boxes()[0].children[0]
    assert isinstance(image, Image)
    assert (image.width, image.height) == (40, 20)
    assert image.channels == 4
    assert len(image.data.pixels) == 40 * 20 * 4


def test_parse_file_resolves_images_next_to_script(tmp_path, make_png):
    from slidescript.parser import SlideParser

    name = make_png()
    script = tmp_path / "deck.ss"
    script.write_text(f'slide "a"\nbox "b" stack-vertical align-left\ndefine "b"\nimage "{name}"\nend\nend\n')
    slides = SlideParser().parse_file(script)
    assert slides[0].boxes()[0].images()[0].width == 200


def test_unknown_keyword_is_ignored_with_warning(parser, caplog):
    with caplog.at_level(logging.WARNING):
        slides = parser.parse('slide "a"\nbackground "red"\nend\n')
    assert len(slides) == 1
    assert "background" in caplog.text
    assert "line 2" in caplog.text


@pytest.mark.parametrize("source, error_type, line", [
    ('slide "a"\nbox "b" stack-diagonal align-left\nend\n', DSLSyntaxError, 2),
    ('slide "a"\nbox "b" stack-vertical align-top\nend\n', DSLSyntaxError, 2),
    ('slide "a"\nbox "b" stack-vertical align-left\ndefine "b"\ntext giant "x"\nend\nend\n', DSLSyntaxError, 4),
    ('slide a\nend\n', DSLSyntaxError, 1),
    ('slide "a"\ntext normal "no box"\nend\n', DSLLogicError, 2),
    ('box "b" stack-vertical align-left\n', DSLLogicError, 1),
    ('slide "a"\nend\nend\n', DSLLogicError, 3),
    ('slide "a"\nslide "b"\nend\n', DSLLogicError, 2),
    ('slide "a"\ndefine "missing"\nend\n', DSLLogicError, 2),
    ('slide "a"\ntext normal "unterminated\nend\n', DSLSyntaxError, 2),
])
def test_errors_carry_line_numbers(parser, source, error_type, line):
    with pytest.raises(error_type) as excinfo:
        parser.parse(source)
    assert excinfo.value.line_num == line
    assert f"line {line}" in str(excinfo.value)


def test_unclosed_slide_reports_its_opening_line(parser):
    with pytest.raises(DSLLogicError) as excinfo:
        parser.parse('\nslide "a"\nbox "b" stack-vertical align-left\n')
    assert excinfo.value.line_num == 2
    assert "never closed" in str(excinfo.value)


def test_define_of_own_slide_is_rejected(parser):
    with pytest.raises(DSLLogicError, match="Attempting to access a inside of a"):
        parser.parse('slide "a"\ndefine "a"\nend\n')


def test_define_of_nested_slide_is_rejected(parser):
    source = 'template "t"\nbox "b" stack-vertical align-left\nend\nslide "s"\nuses "t"\ndefine "t"\nend\n'
    with pytest.raises(DSLLogicError, match="non-box"):
        parser.parse(source)


def test_missing_image_is_an_error(parser):
    with pytest.raises(ImageDecodeError) as excinfo:
        parser.parse('slide "a"\nbox "b" stack-vertical align-left\ndefine "b"\nimage "nope.png"\nend\nend\n')
    assert excinfo.value.line_num == 4
    assert "Failed to load image" in str(excinfo.value)


def test_invalid_image_file_is_an_error(parser, tmp_path):
    (tmp_path / "fake.png").write_text("not an image")
    with pytest.raises(ImageDecodeError):
        parser.parse('slide "a"\nbox "b" stack-vertical align-left\ndefine "b"\nimage "fake.png"\nend\nend\n')


def test_nested_slide_from_uses_is_a_child(parser):
    slides = parser.parse('template "t"\nbox "b" stack-vertical align-left\nend\nslide "s"\nuses "t"\nend\n')
    child = slides[1].children[0]
    assert isinstance(child, Slide)
    assert child.name == "t"
    assert isinstance(child.children[0], Box)


def test_single_slide_with_one_line_of_text(parser):
    slides = parser.parse('slide "A"\nbox "b" stack-vertical align-left\ndefine "b"\ntext normal "hi"\nend\nend\n')

    assert len(slides) == 1
    assert slides[0].name == "A"
    assert slides[0].visible is True
    texts = [text for box in slides[0].iter_boxes() for text in box.texts()]
    assert [text.content for text in texts] == ["hi"]
