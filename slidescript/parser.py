"""
Slideshow DSL parser.

Builds the element tree one statement per line::

    template "layout"
    box "title", stack-vertical, align-center
    box "body", stack-vertical, align-left
    end

    slide "intro"
    uses "layout"
    define "title"
    text title "Hello"
    end
    end

``box`` declares a box inside the current slide, ``define`` makes a box
current so ``text`` and ``image`` lines can fill it, and ``end`` closes the
innermost open box or slide.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .errors import DSLLogicError, DSLSyntaxError, SlideScriptError
from .images import ImageLoader
from .lexer import DELIMITERS, is_string, remove_quotes, split_line
from .models import Box, FontSize, Image, ImageDecoder, Slide, SlideList, StackType, Text, TextAlign
from .syntax import KEYWORD_SIGNATURES, check_syntax
from .templates import TemplateResolver

logger = logging.getLogger(__name__)

END_MARKER = "end"

STACK_KINDS = {kind.value: kind for kind in StackType}
ALIGN_KINDS = {kind.value: kind for kind in TextAlign}
FONT_KINDS = {kind.value: kind for kind in FontSize}


@dataclass
class Scope:
    """An open ``slide``/``template`` or a box made current by ``define``."""
    element: Union[Slide, Box]
    line: int

    @property
    def is_box(self) -> bool:
        return isinstance(self.element, Box)


class ParseContext:
    """
    Parse state shared by the keyword handlers.

    Open scopes live on an explicit stack: the bottom entry is the slide being
    built, the top entry (if any) is the current box.
    """

    def __init__(self):
        self.slide_list = SlideList()
        self.scopes: List[Scope] = []

    @property
    def current_slide(self) -> Optional[Slide]:
        for scope in reversed(self.scopes):
            if not scope.is_box:
                return scope.element
        return None

    @property
    def current_box(self) -> Optional[Box]:
        if self.scopes and self.scopes[-1].is_box:
            return self.scopes[-1].element
        return None

    def require_slide(self, keyword: str, line_num: int) -> Slide:
        slide = self.current_slide
        if slide is None:
            raise DSLLogicError(f"'{keyword}' used outside of a slide or template.", line_num, keyword)
        return slide

    def require_box(self, keyword: str, line_num: int) -> Box:
        box = self.current_box
        if box is None:
            raise DSLLogicError(
                f"Attempting to add {keyword} to non-box object. Use define to select a box first.",
                line_num,
                keyword,
            )
        return box

    def open_slide(self, slide: Slide, line_num: int) -> None:
        if self.scopes:
            open_slide = self.current_slide
            raise DSLLogicError(
                f"Cannot open '{slide.name}' while '{open_slide.name}' (line {self.scopes[0].line}) is still open.",
                line_num,
            )
        self.scopes.append(Scope(slide, line_num))

    def open_box(self, box: Box, line_num: int) -> None:
        # Boxes do not nest: defining another box replaces the current one.
        if self.current_box is not None:
            self.scopes.pop()
        self.scopes.append(Scope(box, line_num))

    def close(self, line_num: int) -> None:
        if not self.scopes:
            raise DSLLogicError("Unmatched end keyword.", line_num, END_MARKER)
        scope = self.scopes.pop()
        if not scope.is_box:
            self.slide_list.append(scope.element)

    def finish(self) -> SlideList:
        if self.scopes:
            scope = self.scopes[0]
            raise DSLLogicError(f"'{scope.element.name}' is never closed with end.", scope.line)
        return self.slide_list


Handler = Callable[[ParseContext, str, List[str], int], None]


class SlideParser:
    """
    Keyword-driven parser turning slideshow source into a :class:`SlideList`.
    """

    def __init__(self, base_dir: Optional[Path] = None, image_loader: Optional[ImageDecoder] = None,
                 debug: bool = False):
        """
        Initialize the slideshow parser.

        Args:
            base_dir: Base directory for resolving relative image paths.
                Ignored when *image_loader* is given.
            image_loader: Callable decoding an image filename; defaults to
                an :class:`ImageLoader` rooted at *base_dir*
            debug: Log every statement as it is handled
        """
        self.base_dir = Path(base_dir) if base_dir else None
        self.debug = debug
        self.image_loader = image_loader or ImageLoader(self.base_dir, debug=debug)
        self.resolver = TemplateResolver(self.image_loader, debug=debug)

        self._handlers: Dict[str, Handler] = {
            "slide": self._handle_slide,
            "template": self._handle_template,
            "box": self._handle_box,
            "uses": self._handle_uses,
            "text": self._handle_text,
            "image": self._handle_image,
            "define": self._handle_define,
        }

    def parse_file(self, path: Union[str, Path]) -> SlideList:
        """
        Parse a slideshow file.  Relative image paths resolve against the
        file's directory unless the parser was given a base directory.
        """
        path = Path(path)
        if self.base_dir is None and isinstance(self.image_loader, ImageLoader):
            self.image_loader.base_dir = path.resolve().parent
        return self.parse(path.read_text(encoding="utf-8"))

    def parse(self, source: str) -> SlideList:
        """
        Parse slideshow source text.

        Args:
            source: Raw DSL text

        Returns:
            Top-level slides and templates in file order

        Raises:
            DSLSyntaxError, DSLLogicError: on the first invalid statement
        """
        context = ParseContext()

        for line_num, raw_line in enumerate(source.splitlines(), 1):
            line = raw_line.strip()
            if len(line) <= 1:
                continue

            tokens = split_line(line, DELIMITERS, line_num)
            if not tokens:
                continue

            keyword, args = tokens[0], tokens[1:]
            handler = self._handlers.get(keyword)
            if handler is not None:
                if self.debug:
                    logger.debug(f"line {line_num}: {keyword} {args}")
                try:
                    handler(context, keyword, args, line_num)
                except SlideScriptError as exc:
                    exc.with_line(line_num)
                    raise
            elif END_MARKER in keyword and not is_string(keyword):
                context.close(line_num)
            else:
                logger.warning(f"Ignoring unknown keyword '{keyword}' on line {line_num}")

        slide_list = context.finish()
        if self.debug:
            logger.debug(f"Parsed {len(slide_list)} top-level slides "
                         f"({len(slide_list.presentation())} visible)")
        return slide_list

    # ------------------------------------------------------------------
    # Keyword handlers
    # ------------------------------------------------------------------

    def _handle_slide(self, context: ParseContext, keyword: str, args: List[str], line_num: int) -> None:
        check_syntax(keyword, args, KEYWORD_SIGNATURES[keyword], line_num)
        context.open_slide(Slide(name=remove_quotes(args[0]), visible=True, line=line_num), line_num)

    def _handle_template(self, context: ParseContext, keyword: str, args: List[str], line_num: int) -> None:
        check_syntax(keyword, args, KEYWORD_SIGNATURES[keyword], line_num)
        context.open_slide(Slide(name=remove_quotes(args[0]), visible=False, line=line_num), line_num)

    def _handle_box(self, context: ParseContext, keyword: str, args: List[str], line_num: int) -> None:
        check_syntax(keyword, args, KEYWORD_SIGNATURES[keyword], line_num)

        stack_type = STACK_KINDS.get(args[1])
        if stack_type is None:
            raise DSLSyntaxError(
                f"Expected 'stack-horizontal' or 'stack-vertical' for argument 2 but found {args[1]}",
                line_num, keyword,
            )
        text_align = ALIGN_KINDS.get(args[2])
        if text_align is None:
            raise DSLSyntaxError(
                f"Expected 'align-left', 'align-right', or 'align-center' for argument 3 but found {args[2]}",
                line_num, keyword,
            )

        slide = context.require_slide(keyword, line_num)
        slide.add(Box(name=remove_quotes(args[0]), stack_type=stack_type, text_align=text_align, line=line_num))

    def _handle_uses(self, context: ParseContext, keyword: str, args: List[str], line_num: int) -> None:
        check_syntax(keyword, args, KEYWORD_SIGNATURES[keyword], line_num)
        slide = context.require_slide(keyword, line_num)
        slide.add(self.resolver.resolve(remove_quotes(args[0]), context.slide_list, line_num))

    def _handle_text(self, context: ParseContext, keyword: str, args: List[str], line_num: int) -> None:
        check_syntax(keyword, args, KEYWORD_SIGNATURES[keyword], line_num)

        font_size = FONT_KINDS.get(args[0])
        if font_size is None:
            raise DSLSyntaxError(
                f"Expected 'huge', 'title', 'normal', or 'small' for argument 1 but found {args[0]}",
                line_num, keyword,
            )

        box = context.require_box(keyword, line_num)
        box.add(Text(content=remove_quotes(args[1]), font_size=font_size, line=line_num))

    def _handle_image(self, context: ParseContext, keyword: str, args: List[str], line_num: int) -> None:
        check_syntax(keyword, args, KEYWORD_SIGNATURES[keyword], line_num)
        box = context.require_box(keyword, line_num)
        filename = remove_quotes(args[0])
        box.add(Image(filename=filename, data=self.image_loader(filename), line=line_num))

    def _handle_define(self, context: ParseContext, keyword: str, args: List[str], line_num: int) -> None:
        check_syntax(keyword, args, KEYWORD_SIGNATURES[keyword], line_num)
        name = remove_quotes(args[0])
        slide = context.require_slide(keyword, line_num)

        element = self.resolver.find_element(name, slide, line_num)
        if element is None:
            raise DSLLogicError(f"Trying to define nonexistent element '{name}'.", line_num, keyword)
        if not isinstance(element, Box):
            raise DSLLogicError(f"Trying to define non-box element '{name}'.", line_num, keyword)

        context.open_box(element, line_num)
