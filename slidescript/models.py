"""
Data models for the slideshow element tree.

A slideshow is a :class:`SlideList` of top-level slides.  Slides own boxes
(and nested slides pulled in with ``uses``), boxes own text lines and images.
Geometry fields are normalized: box coordinates are fractions of the
viewport, element coordinates are fractions of their box.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Iterator, List, Optional, Union


class FontSize(Enum):
    HUGE = "huge"
    TITLE = "title"
    NORMAL = "normal"
    SMALL = "small"


class StackType(Enum):
    VERTICAL = "stack-vertical"
    HORIZONTAL = "stack-horizontal"


class TextAlign(Enum):
    LEFT = "align-left"
    CENTER = "align-center"
    RIGHT = "align-right"


@dataclass(frozen=True)
class ImageData:
    """Decoded pixel buffer, always stored as RGBA."""
    pixels: bytes
    width: int
    height: int
    channels: int  # channel count of the source file, before RGBA conversion


# Callable used to re-decode images when a subtree is cloned.
ImageDecoder = Callable[[str], ImageData]


@dataclass
class Text:
    """
    A single line of text inside a box.
    """
    content: str
    font_size: FontSize = FontSize.NORMAL
    x: float = 0.0  # left edge, fraction of box width
    y: float = 0.0  # baseline, fraction of box height
    size: float = 0.0  # font size as a fraction of viewport width
    line: Optional[int] = None  # source line, for diagnostics

    tag = "text"

    def clone(self, decode: Optional[ImageDecoder] = None) -> "Text":
        return Text(
            content=self.content,
            font_size=self.font_size,
            x=self.x,
            y=self.y,
            size=self.size,
            line=self.line,
        )

    def to_dict(self) -> Dict:
        return {
            "type": self.tag,
            "content": self.content,
            "font_size": self.font_size.value,
            "x": self.x,
            "y": self.y,
            "size": self.size,
        }


@dataclass
class Image:
    """
    An image inside a box, with its decoded pixels.
    """
    filename: str
    data: ImageData
    x: float = 0.0
    y: float = 0.0
    rwidth: float = 0.0  # render width, fraction of box width
    rheight: float = 0.0  # render height, fraction of box height
    line: Optional[int] = None

    tag = "image"

    @property
    def width(self) -> int:
        """Pixel width of the decoded image."""
        return self.data.width

    @property
    def height(self) -> int:
        """Pixel height of the decoded image."""
        return self.data.height

    @property
    def channels(self) -> int:
        return self.data.channels

    @property
    def aspect_ratio(self) -> float:
        return self.data.width / self.data.height

    def clone(self, decode: Optional[ImageDecoder] = None) -> "Image":
        # With a decoder the file is read again; otherwise the (immutable)
        # pixel buffer is reused.
        data = decode(self.filename) if decode is not None else self.data
        return Image(
            filename=self.filename,
            data=data,
            x=self.x,
            y=self.y,
            rwidth=self.rwidth,
            rheight=self.rheight,
            line=self.line,
        )

    def to_dict(self) -> Dict:
        return {
            "type": self.tag,
            "filename": self.filename,
            "width": self.width,
            "height": self.height,
            "x": self.x,
            "y": self.y,
            "rwidth": self.rwidth,
            "rheight": self.rheight,
        }


BoxElement = Union[Text, Image]


@dataclass
class Box:
    """
    A rectangular layout region holding text lines and images.
    """
    name: Optional[str]
    stack_type: StackType = StackType.VERTICAL
    text_align: TextAlign = TextAlign.LEFT
    children: List[BoxElement] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    line: Optional[int] = None

    tag = "box"

    def is_vertical(self) -> bool:
        return self.stack_type is StackType.VERTICAL

    def is_horizontal(self) -> bool:
        return self.stack_type is StackType.HORIZONTAL

    def add(self, element: BoxElement) -> None:
        self.children.append(element)

    def insert(self, index: int, element: BoxElement) -> None:
        self.children.insert(index, element)

    def texts(self) -> List[Text]:
        return [child for child in self.children if isinstance(child, Text)]

    def images(self) -> List[Image]:
        return [child for child in self.children if isinstance(child, Image)]

    def clone(self, decode: Optional[ImageDecoder] = None) -> "Box":
        return Box(
            name=self.name,
            stack_type=self.stack_type,
            text_align=self.text_align,
            children=[child.clone(decode) for child in self.children],
            x=self.x,
            y=self.y,
            width=self.width,
            height=self.height,
            line=self.line,
        )

    def to_dict(self) -> Dict:
        return {
            "type": self.tag,
            "name": self.name,
            "stack": self.stack_type.value,
            "align": self.text_align.value,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "elements": [child.to_dict() for child in self.children],
        }


@dataclass
class Slide:
    """
    A slide (or template) holding boxes and nested slides.
    """
    name: Optional[str]
    visible: bool = True  # False for templates
    children: List[Union[Box, "Slide"]] = field(default_factory=list)
    line: Optional[int] = None

    tag = "slide"

    @property
    def is_template(self) -> bool:
        return not self.visible

    def add(self, element: Union[Box, "Slide"]) -> None:
        self.children.append(element)

    def boxes(self) -> List[Box]:
        """Direct Box children, in document order."""
        return [child for child in self.children if isinstance(child, Box)]

    def nested_slides(self) -> List["Slide"]:
        return [child for child in self.children if isinstance(child, Slide)]

    def iter_boxes(self) -> Iterator[Box]:
        """All boxes of this slide and its nested slides, depth first."""
        for child in self.children:
            if isinstance(child, Box):
                yield child
            elif isinstance(child, Slide):
                yield from child.iter_boxes()

    def top_text(self) -> Optional[str]:
        """Content of the first text line on the slide, used as its title."""
        for child in self.children:
            if isinstance(child, Slide):
                return child.top_text()
            if isinstance(child, Box):
                texts = child.texts()
                if texts:
                    return texts[0].content
        return None

    def clone(self, decode: Optional[ImageDecoder] = None) -> "Slide":
        return Slide(
            name=self.name,
            visible=self.visible,
            children=[child.clone(decode) for child in self.children],
            line=self.line,
        )

    def to_dict(self) -> Dict:
        return {
            "type": self.tag,
            "name": self.name,
            "visible": self.visible,
            "elements": [child.to_dict() for child in self.children],
        }


SlideElement = Union[Slide, Box, Text, Image]


class SlideList:
    """
    Top-level slides and templates in file order.
    """

    def __init__(self, slides: Optional[List[Slide]] = None):
        self.slides: List[Slide] = list(slides) if slides else []

    def append(self, slide: Slide) -> None:
        self.slides.append(slide)

    def __iter__(self) -> Iterator[Slide]:
        return iter(self.slides)

    def __len__(self) -> int:
        return len(self.slides)

    def __getitem__(self, index: int) -> Slide:
        return self.slides[index]

    def find(self, name: str) -> Optional[Slide]:
        """First top-level slide or template with this exact name."""
        for slide in self.slides:
            if slide.name == name:
                return slide
        return None

    def presentation(self) -> List[Slide]:
        """Slides in presentation order; templates are never shown."""
        return [slide for slide in self.slides if slide.visible]

    def clone(self, decode: Optional[ImageDecoder] = None) -> "SlideList":
        return SlideList([slide.clone(decode) for slide in self.slides])

    def to_dict(self) -> Dict:
        return {"slides": [slide.to_dict() for slide in self.slides]}

    def __repr__(self):
        return f"<SlideList: {len(self.slides)} slides>"
