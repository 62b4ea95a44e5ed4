"""
Error types raised while parsing and laying out a slideshow.

Every error carries the 1-based source line (when known) so the CLI can print
a diagnostic the author can act on.  Library code only raises these; turning
them into an exit status is the job of :func:`slidescript.generator.main`.
"""
from typing import Optional


class SlideScriptError(ValueError):
    """Base class for every fatal slideshow error."""

    kind = "Error"

    def __init__(self, message: str, line_num: Optional[int] = None, keyword: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line_num = line_num
        self.keyword = keyword

    def with_line(self, line_num: int) -> "SlideScriptError":
        """Attach a line number if the error was raised without one."""
        if self.line_num is None:
            self.line_num = line_num
        return self

    def __str__(self):
        if self.line_num is None:
            return f"{self.kind} : {self.message}"
        return f"{self.kind} on line {self.line_num} : {self.message}"


class DSLSyntaxError(SlideScriptError):
    """Argument count/type mismatch, bad enum literal or malformed quoting."""

    kind = "Syntax Error"


class DSLLogicError(SlideScriptError):
    """Well-formed statement that does not make sense where it appears."""

    kind = "Logic Error"


class LayoutError(DSLLogicError):
    """The document cannot be laid out (e.g. a word wider than its box)."""

    kind = "Layout Error"


class ImageDecodeError(DSLLogicError):
    """An image referenced by the slideshow could not be read."""

    kind = "Image Error"
