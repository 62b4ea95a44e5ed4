"""
Quote-aware line tokenizer for the slideshow DSL.

A statement occupies one line.  Arguments are separated by any of the
delimiter characters; text enclosed in double quotes is never split, and the
quotes stay part of the token so the syntax checker can tell string literals
from bare identifiers.  Both spellings below give the same tokens::

    box: "title", stack-vertical, align-center
    box "title" stack-vertical align-center
"""
import re
from typing import List, Optional

from .errors import DSLSyntaxError

DELIMITERS = ":, \t"
QUOTE = '"'

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def split_line(line: str, delimiters: str = DELIMITERS, line_num: Optional[int] = None) -> List[str]:
    """
    Split *line* on *delimiters*, keeping quoted substrings intact.

    Args:
        line: A single source line
        delimiters: Characters that separate tokens outside of quotes
        line_num: Source line, used in the error for an unterminated quote

    Returns:
        Trimmed, non-empty tokens in source order
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
            current.append(char)
        elif char in delimiters and not in_quotes:
            _flush(current, tokens)
        else:
            current.append(char)

    if in_quotes:
        raise DSLSyntaxError("Unterminated string literal.", line_num)

    _flush(current, tokens)
    return tokens


def _flush(current: List[str], tokens: List[str]) -> None:
    token = "".join(current).strip()
    if token:
        tokens.append(token)
    current.clear()


def is_string(token: str) -> bool:
    """True when *token* is wrapped in a matching pair of double quotes."""
    return len(token) >= 2 and token[0] == QUOTE and token[-1] == QUOTE


def is_integer(token: str) -> bool:
    """True when *token* is a complete base-10 integer."""
    return bool(_INTEGER_RE.fullmatch(token))


def remove_quotes(token: str) -> str:
    """Strip the surrounding quotes of a string literal."""
    if is_string(token):
        return token[1:-1]
    return token
