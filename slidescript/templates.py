"""
Name lookup and deep copying for ``uses`` and ``define``.
"""
import logging
from typing import Optional

from .errors import DSLLogicError
from .models import Box, ImageDecoder, Slide, SlideElement, SlideList

logger = logging.getLogger(__name__)


class TemplateResolver:
    """
    Resolves slide and box names while a slideshow is being built.

    ``uses`` looks up top-level slides and templates and splices a deep copy
    into the current slide; ``define`` looks up a box inside the current
    slide so text and images can be added to it.
    """

    def __init__(self, image_loader: Optional[ImageDecoder] = None, debug: bool = False):
        self.image_loader = image_loader
        self.debug = debug

    def find_slide(self, name: str, slide_list: SlideList) -> Optional[Slide]:
        """First top-level slide or template named *name*."""
        return slide_list.find(name)

    def find_element(self, name: str, slide: Optional[Slide], line_num: Optional[int] = None) -> Optional[SlideElement]:
        """
        Depth-first search of *slide* for a box or nested slide named *name*.

        Raises:
            DSLLogicError: if *slide* itself carries the name, i.e. the
                statement refers to the slide it is written in.
        """
        if slide is None:
            return None
        if slide.name is not None and slide.name == name:
            raise DSLLogicError(f"Attempting to access {name} inside of {slide.name}", line_num, "define")

        for child in slide.children:
            if isinstance(child, Box) and child.name == name:
                return child
            if isinstance(child, Slide):
                if child.name == name:
                    return child
                found = self.find_element(name, child, line_num)
                if found is not None:
                    return found
        return None

    def clone(self, slide: Slide) -> Slide:
        """Deep copy of *slide*; images are decoded again from their files."""
        return slide.clone(self.image_loader)

    def resolve(self, name: str, slide_list: SlideList, line_num: Optional[int] = None) -> Slide:
        """
        Clone the top-level slide or template named *name*.

        Raises:
            DSLLogicError: if no top-level slide has that name
        """
        found = self.find_slide(name, slide_list)
        if found is None:
            raise DSLLogicError(f"Couldn't find slide or template with name: {name}", line_num, "uses")

        if self.debug:
            kind = "template" if found.is_template else "slide"
            logger.debug(f"Cloning {kind} '{name}' ({len(found.children)} elements)")
        return self.clone(found)
