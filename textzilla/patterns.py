"""
Regular expression collaborator.

Needles are literal unless the caller hands in a `Pattern` (or an already
compiled `re.Pattern`). Delimited notation such as `/b+c/i` or `#\\t#` is
turned into a `Pattern` explicitly with `Pattern.of`.

Subjects are encoded byte buffers and every offset crossing this boundary is
a byte offset. Matching itself runs over the decoded text, so classes like
`.` or `\\w` always consume whole code points.
"""

import logging
import re
from typing import Callable, Iterator, List, Optional, Tuple, Union

from textzilla.errors import PatternInvalid
from textzilla.stringable import to_string

logger = logging.getLogger(__name__)

DELIMITERS = "/#%"

_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}

Replacement = Union[object, Callable[[str], object]]


def _parse_notation(notation: str) -> Tuple[str, int]:
    if len(notation) < 2 or notation[0] not in DELIMITERS:
        raise PatternInvalid(f"Pattern {notation!r} is not delimited by one of {DELIMITERS!r}")

    delimiter = notation[0]
    end = notation.rfind(delimiter)
    if end == 0:
        raise PatternInvalid(f"No ending delimiter {delimiter!r} found in {notation!r}")

    flags = 0
    for modifier in notation[end + 1 :]:
        if modifier not in _FLAGS:
            raise PatternInvalid(f"Unknown modifier {modifier!r} in {notation!r}")
        flags |= _FLAGS[modifier]
    return notation[1:end], flags


class Pattern:
    """A compiled regular expression, always applied to decoded text."""

    __slots__ = ("_compiled",)

    def __init__(self, compiled: "re.Pattern[str]"):
        self._compiled = compiled

    @classmethod
    def compile(cls, source: str, flags: int = 0) -> "Pattern":
        try:
            return cls(re.compile(source, flags))
        except re.error as e:
            logger.debug("Rejected pattern %r: %s", source, e)
            raise PatternInvalid(f"Invalid pattern {source!r}: {e}") from e

    @classmethod
    def of(cls, notation: Union[str, "Pattern", "re.Pattern"]) -> "Pattern":
        """Build a pattern from delimited notation, a compiled `re.Pattern`, or another `Pattern`."""
        if isinstance(notation, Pattern):
            return notation
        if isinstance(notation, re.Pattern):
            if isinstance(notation.pattern, bytes):
                raise PatternInvalid("Byte patterns are not supported, compile the expression from `str`")
            return cls(notation)
        if not isinstance(notation, str):
            raise PatternInvalid(f"Pattern must be a string, got {type(notation).__name__}")
        source, flags = _parse_notation(notation)
        return cls.compile(source, flags)

    @property
    def source(self) -> str:
        return self._compiled.pattern

    @property
    def flags(self) -> int:
        return self._compiled.flags

    @property
    def regex(self) -> "re.Pattern[str]":
        return self._compiled

    def __repr__(self) -> str:
        return f"Pattern({self.source!r})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self._compiled == other._compiled

    def __hash__(self) -> int:
        return hash(self._compiled)


def is_valid_pattern(notation) -> bool:
    """Checks if `notation` is well-formed delimited notation that compiles."""
    if isinstance(notation, (Pattern, re.Pattern)):
        return True
    if not isinstance(notation, str):
        return False
    try:
        Pattern.of(notation)
    except PatternInvalid:
        return False
    return True


def as_pattern(needle) -> Optional[Pattern]:
    """Returns the `Pattern` a needle stands for, or `None` for literal needles."""
    if isinstance(needle, (Pattern, re.Pattern)):
        return Pattern.of(needle)
    return None


def _iter_matches(pattern: Pattern, subject: bytes, codec: str, start_byte: int = 0) -> Iterator[Tuple["re.Match[str]", int]]:
    """Yields matches with their byte offsets, scanning the decoded subject once."""
    decoded = subject.decode(codec)
    position = len(subject[:start_byte].decode(codec)) if start_byte > 0 else 0
    consumed_chars, consumed_bytes = 0, 0
    for match in pattern.regex.finditer(decoded, position):
        consumed_bytes += len(decoded[consumed_chars : match.start()].encode(codec))
        consumed_chars = match.start()
        yield match, consumed_bytes


def execute(pattern: Pattern, subject: bytes, codec: str, limit: int = 1) -> List[List[str]]:
    """Returns the group lists of the first `limit` matches, all of them when `limit` is 0."""
    limit = max(0, limit)
    results: List[List[str]] = []
    for match, _ in _iter_matches(pattern, subject, codec):
        results.append([match.group(0), *(group if group is not None else "" for group in match.groups())])
        if limit and len(results) >= limit:
            break
    return results


def match_with_byte_offset(pattern: Pattern, subject: bytes, codec: str, start_byte: int = 0) -> Optional[Tuple[bytes, int]]:
    """The first match at or after `start_byte`, as matched bytes and their byte offset."""
    for match, byte_offset in _iter_matches(pattern, subject, codec, start_byte):
        return match.group(0).encode(codec), byte_offset
    return None


def replace(pattern: Pattern, subject: bytes, codec: str, replacement: Replacement, count: int = 0) -> bytes:
    """Substitutes matches with a stringable template (`\\1` references) or the result of a callable."""
    decoded = subject.decode(codec)
    if callable(replacement):
        def substitute(match: "re.Match[str]") -> str:
            return to_string(replacement(match.group(0)))

        result = pattern.regex.sub(substitute, decoded, count=count)
    else:
        replacement = to_string(replacement)
        try:
            result = pattern.regex.sub(replacement, decoded, count=count)
        except re.error as e:
            raise PatternInvalid(f"Invalid replacement template {replacement!r}: {e}") from e
    return result.encode(codec)


def split(pattern: Pattern, subject: bytes, codec: str) -> List[bytes]:
    return [part.encode(codec) for part in pattern.regex.split(subject.decode(codec)) if part is not None]
