"""
TextZilla: immutable, Unicode-aware text with Python and JavaScript style ergonomics.

    >>> from textzilla import text
    >>> text("héllo wörld")[::-1]
    Text('dlröw olléh')
"""

from typing import Any

from textzilla.encodings import DEFAULT_ENCODING
from textzilla.errors import InvalidArgument, OutOfRange, PatternInvalid, TextError
from textzilla.offsets import Direction
from textzilla.patterns import Pattern, is_valid_pattern
from textzilla.slicing import Slice
from textzilla.stringable import is_stringable, to_string
from textzilla.text import Text

__version__ = "1.1.0"

__all__ = [
    "DEFAULT_ENCODING",
    "Direction",
    "InvalidArgument",
    "OutOfRange",
    "Pattern",
    "PatternInvalid",
    "Slice",
    "Text",
    "TextError",
    "is_stringable",
    "is_valid_pattern",
    "text",
    "to_string",
]


def text(value: Any, encoding: str = DEFAULT_ENCODING) -> Text:
    """Shorthand for `Text.of`."""
    return Text.of(value, encoding)
