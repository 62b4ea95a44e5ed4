"""
Per-keyword argument validation.
"""
from enum import Enum
from typing import Dict, Sequence, Tuple

from .errors import DSLSyntaxError
from .lexer import is_integer, is_string


class ArgKind(Enum):
    STRING = "str"
    INT = "int"
    UINT = "uint"
    TYPE = "type"  # bare identifier such as ``stack-vertical``


KEYWORD_SIGNATURES: Dict[str, Tuple[ArgKind, ...]] = {
    "slide": (ArgKind.STRING,),
    "template": (ArgKind.STRING,),
    "box": (ArgKind.STRING, ArgKind.TYPE, ArgKind.TYPE),
    "uses": (ArgKind.STRING,),
    "text": (ArgKind.TYPE, ArgKind.STRING),
    "image": (ArgKind.STRING,),
    "define": (ArgKind.STRING,),
}


def check_syntax(keyword: str, args: Sequence[str], signature: Sequence[ArgKind], line_num: int) -> None:
    """
    Verify *args* against *signature*.

    Raises:
        DSLSyntaxError: on a count mismatch or the first argument of the
            wrong kind.  Argument positions in messages are 1-based.
    """
    if len(args) != len(signature):
        raise DSLSyntaxError(
            f"{keyword} expects {len(signature)} arguments, but {len(args)} were given.",
            line_num,
            keyword,
        )

    for position, (arg, kind) in enumerate(zip(args, signature), 1):
        if kind is ArgKind.STRING and not is_string(arg):
            expected = "String"
        elif kind is ArgKind.INT and not is_integer(arg):
            expected = "Integer"
        elif kind is ArgKind.UINT and (not is_integer(arg) or int(arg) < 0):
            expected = "Positive Integer"
        elif kind is ArgKind.TYPE and (is_integer(arg) or is_string(arg)):
            expected = "identifier"
        else:
            continue
        raise DSLSyntaxError(
            f"{keyword} expected {expected} for argument {position} but found {arg}",
            line_num,
            keyword,
        )
