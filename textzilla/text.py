"""
Immutable, encoding-aware text with JavaScript and Python flavored helpers.

A `Text` owns the encoded bytes of its value. Public positions are always
code-point indices, while searching and substring extraction work on the byte
buffer. The two coordinate spaces are bridged by an offset map, built lazily
on first use and never shared between instances.

    >>> t = Text("café crème")
    >>> t.length, t.size
    (10, 12)
    >>> t.index_of("crème"), str(t[-5:])
    (5, 'crème')
    >>> str(t["::-1"])
    'emèrc éfac'
"""

import re
import sys
from typing import Any, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from textzilla import patterns
from textzilla.encodings import DEFAULT_ENCODING, resolve_codec
from textzilla.errors import InvalidArgument, OutOfRange
from textzilla.offsets import NOT_FOUND, Direction, build_offset_map, is_boundary, lookup
from textzilla.patterns import Pattern, as_pattern
from textzilla.slicing import Slice
from textzilla.stringable import is_stringable, to_string

SliceKey = Union[str, Slice, slice]

_NUMERIC = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_HEXDIGITS = frozenset("0123456789abcdefABCDEF")


def _selected_indices(key: SliceKey, length: int) -> Iterable[int]:
    """Indices a key selects. Builtin slices clamp like `str`, notation wraps negative starts."""
    if isinstance(key, slice):
        Slice.from_builtin(key)
        return range(*key.indices(length))
    if isinstance(key, str):
        key = Slice.parse(key)
    if not isinstance(key, Slice):
        raise InvalidArgument(f"Expected slice notation, got {type(key).__name__}")
    return key.iter_indices(length)


class Text:
    __slots__ = ("_text", "_buffer", "_encoding", "_codec", "_length", "_size", "_map")

    def __init__(self, value: Any = "", encoding: str = DEFAULT_ENCODING):
        self._encoding = encoding
        self._codec = resolve_codec(encoding)
        self._init(value)

    # region Construction

    @classmethod
    def of(cls, value: Any, encoding: str = DEFAULT_ENCODING) -> "Text":
        return cls(value, encoding)

    @classmethod
    def from_bytes(cls, buffer: bytes, encoding: str = DEFAULT_ENCODING) -> "Text":
        """Wraps an already encoded buffer, rejecting bytes that do not decode."""
        try:
            decoded = bytes(buffer).decode(resolve_codec(encoding))
        except UnicodeDecodeError as e:
            raise InvalidArgument(f"Buffer is not valid {encoding}: {e}") from e
        return cls(decoded, encoding)

    @classmethod
    def pad(cls, length: int, text: Any = " ", encoding: str = DEFAULT_ENCODING) -> "Text":
        """Repeats `text` until exactly `length` code points are produced."""
        if length < 1:
            return cls("", encoding)
        unit = to_string(text)
        if unit == "":
            raise InvalidArgument("Can not pad with an empty string")
        repetitions = -(-length // len(unit))
        return cls((unit * repetitions)[:length], encoding)

    def _init(self, value: Any) -> "Text":
        # Only ever called on instances that have not been handed out yet
        decoded = to_string(value)
        try:
            buffer = decoded.encode(self._codec)
        except UnicodeEncodeError as e:
            raise InvalidArgument(f"Text can not be represented in {self._encoding}: {e}") from e
        self._text = decoded
        self._buffer = buffer
        self._length = len(decoded)
        self._size = len(buffer)
        self._map = None
        return self

    def _derive(self, *values: Any) -> "Text":
        derived = type(self).__new__(type(self))
        derived._encoding = self._encoding
        derived._codec = self._codec
        return derived._init(self._merge(*values))

    def _derive_bytes(self, buffer: bytes) -> "Text":
        return self._derive(buffer.decode(self._codec))

    @staticmethod
    def _merge(*values: Any) -> str:
        return "".join(to_string(value) for value in values)

    # endregion

    # region Properties

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def length(self) -> int:
        """Number of code points."""
        return self._length

    @property
    def size(self) -> int:
        """Number of bytes in the encoded buffer."""
        return self._size

    @property
    def buffer(self) -> bytes:
        return self._buffer

    def is_empty(self) -> bool:
        return self._size == 0

    def to_string(self) -> str:
        return self._text

    def json_serialize(self) -> str:
        return self._text

    # endregion

    # region Offset engine

    def _offset_map(self) -> np.ndarray:
        offset_map = self._map
        if offset_map is None:
            # Racing builders produce identical arrays, the last assignment wins
            offset_map = build_offset_map(self._buffer, self._text, self._codec)
            self._map = offset_map
        return offset_map

    def translate(self, index: int) -> int:
        """Resolves a negative code-point index against the length, without an upper bound check."""
        if index < 0:
            index += self._length
        return index

    def get_offset(self, offset: int, direction: Direction = Direction.BYTE_TO_CODEPOINT) -> int:
        """Translates a byte offset to the owning code point, or a code point to its first byte.

        Returns -1 when the offset is not covered by the buffer.
        """
        if offset == 0:
            return 0
        return lookup(self._offset_map(), offset, direction)

    def _byte_offset(self, index: int) -> int:
        if index >= self._length:
            return self._size
        return self.get_offset(index, Direction.CODEPOINT_TO_BYTE)

    def _codepoint_index(self, byte_offset: int) -> int:
        if byte_offset >= self._size:
            return self._length
        return self.get_offset(byte_offset, Direction.BYTE_TO_CODEPOINT)

    def _substring(self, start: int, stop: int) -> bytes:
        return self._buffer[self._byte_offset(start) : self._byte_offset(stop)]

    def _codepoint_starts(self) -> np.ndarray:
        offset_map = self._offset_map()
        return np.flatnonzero(np.diff(offset_map, prepend=-1))

    # endregion

    # region Indexed access

    def at(self, offset: int) -> str:
        """The code point at `offset`, counting from the end when negative, or "" when missing."""
        index = self.translate(offset)
        if index < 0 or index >= self._length:
            return ""
        return self._substring(index, index + 1).decode(self._codec)

    def char_at(self, offset: int) -> "Text":
        return self._derive(self.at(offset))

    def get(self, index: int) -> "Text":
        return self.char_at(index)

    def get_range(self, key: SliceKey) -> "Text":
        """Selects code points with `start:stop:step` notation, a `Slice`, or a builtin `slice`."""
        chars = list(self)
        return self._derive(*(chars[index] for index in _selected_indices(key, len(chars))))

    def slice(self, start: int, stop: Optional[int] = None) -> "Text":
        """Extracts code points `start` up to, not including, `stop`; both may be negative."""
        if stop is None:
            stop = self._length
        start = min(max(self.translate(start), 0), self._length)
        stop = min(max(self.translate(stop), 0), self._length)
        if stop <= start:
            return self._derive()
        return self._derive_bytes(self._substring(start, stop))

    def set(self, index: int, value: Any, fill: Any = " ") -> "Text":
        """Replaces the code point at `index`, padding with `fill` when writing past the end."""
        position = self.translate(index)
        if position < 0:
            raise OutOfRange(f"Offset {index} does not exist")
        if position > self._length:
            if to_string(fill) == "":
                raise InvalidArgument("Can not pad with an empty string")
            return self._derive(self.pad_end(position, fill), value)
        return self._derive(self.slice(0, position), value, self.slice(position + 1))

    def set_range(self, key: SliceKey, value: Any) -> "Text":
        replacement = to_string(value)
        chars = list(self)
        for index in _selected_indices(key, len(chars)):
            chars[index] = replacement
        return self._derive(*chars)

    def delete(self, index: int) -> "Text":
        position = self.translate(index)
        if position < 0 or position >= self._length:
            raise OutOfRange(f"Offset {index} does not exist")
        return self._derive(self.slice(0, position), self.slice(position + 1))

    def delete_range(self, key: SliceKey) -> "Text":
        segments = self.split()
        removed = set(_selected_indices(key, len(segments)))
        return self._derive(*(segment for n, segment in enumerate(segments) if n not in removed))

    def exists(self, key: Union[int, SliceKey]) -> bool:
        return not self[key].is_empty()

    # endregion

    # region Search

    def _find(self, needle: Union[str, Pattern], offset: int = 0) -> Tuple[str, int]:
        """First match at or after code point `offset`, as the matched text and its code-point index."""
        start_byte = self._byte_offset(offset)

        if isinstance(needle, Pattern):
            found = patterns.match_with_byte_offset(needle, self._buffer, self._codec, start_byte)
            if found is None:
                return "", NOT_FOUND
            matched, byte_offset = found
            return matched.decode(self._codec), self._codepoint_index(byte_offset)

        encoded = needle.encode(self._codec)
        offset_map = self._offset_map()
        position = self._buffer.find(encoded, start_byte)
        # Byte-level hits can land inside a code point in encodings like UTF-16
        while position != -1 and not is_boundary(offset_map, position):
            position = self._buffer.find(encoded, position + 1)
        if position == -1:
            return "", NOT_FOUND
        return needle, self._codepoint_index(position)

    def _needle(self, needle: Any) -> Union[str, Pattern]:
        pattern = as_pattern(needle)
        if pattern is not None:
            return pattern
        return to_string(needle)

    def index_of(self, needle: Any, offset: int = 0) -> int:
        """Code-point index of the first occurrence of a substring or `Pattern`, -1 when absent."""
        needle = self._needle(needle)
        if needle == "" or self.is_empty() or offset > self._length:
            return NOT_FOUND
        return self._find(needle, max(self.translate(offset), 0))[1]

    def last_index_of(self, needle: Any, offset: int = sys.maxsize) -> int:
        """Code-point index of the last occurrence starting at or before `offset`, -1 when absent.

        Matches are collected by repeated forward searches, each resuming after the
        previous match, so overlapping occurrences are not considered.
        """
        needle = self._needle(needle)
        if needle == "" or self.is_empty() or offset < 0:
            return NOT_FOUND

        result = NOT_FOUND
        position = 0
        while position <= self._length:
            matched, index = self._find(needle, position)
            if index < 0 or index > offset:
                break
            result = index
            position = index + max(len(matched), 1)
        return result

    def count(self, needle: Any = None) -> int:
        """Number of non-overlapping occurrences of `needle`, or the length when called without one."""
        if needle is None:
            return self._length
        needle = self._needle(needle)
        if needle == "":
            return 0

        total = position = 0
        # Empty pattern matches count at the very end too, as with `re.findall`
        while position <= self._length:
            matched, index = self._find(needle, position)
            if index < 0:
                break
            total += 1
            position = index + max(len(matched), 1)
        return total

    def _caseless(self, needle: str, caseless: bool) -> Tuple[str, str]:
        if not caseless:
            return self._text, needle
        return self._text.casefold(), needle.casefold()

    def contains(self, needle: Any, caseless: bool = False) -> bool:
        needle = self._needle(needle)
        if self.is_empty() or needle == "":
            return False
        if isinstance(needle, Pattern):
            return patterns.match_with_byte_offset(needle, self._buffer, self._codec) is not None
        haystack, needle = self._caseless(needle, caseless)
        return needle in haystack

    def includes(self, needle: Any) -> bool:
        return self.contains(needle)

    def contains_some(self, *needles: Any) -> bool:
        return any(self.includes(needle) for needle in needles)

    def contains_every(self, *needles: Any) -> bool:
        if not needles:
            return False
        return all(self.includes(needle) for needle in needles)

    def starts_with(self, needle: Any, caseless: bool = False) -> bool:
        needle = to_string(needle)
        if self.is_empty() or needle == "":
            return False
        haystack, needle = self._caseless(needle, caseless)
        return haystack.startswith(needle)

    def ends_with(self, needle: Any, caseless: bool = False) -> bool:
        needle = to_string(needle)
        if self.is_empty() or needle == "":
            return False
        haystack, needle = self._caseless(needle, caseless)
        return haystack.endswith(needle)

    def matches(self, pattern: Union[str, Pattern, "re.Pattern"]) -> List[str]:
        """Groups of the first match of `pattern`, the whole match first; [] when nothing matches."""
        results = patterns.execute(Pattern.of(pattern), self._buffer, self._codec, 1)
        return results[0] if results else []

    def match_all(self, pattern: Union[str, Pattern, "re.Pattern"]) -> Iterator[List[str]]:
        yield from patterns.execute(Pattern.of(pattern), self._buffer, self._codec, 0)

    # endregion

    # region Transforms

    def concat(self, *values: Any) -> "Text":
        return self._derive(self._text, *values)

    def prepend(self, *values: Any) -> "Text":
        return self._derive(*values, self._text)

    def to_lower_case(self) -> "Text":
        return self._derive(self._text.lower())

    def to_upper_case(self) -> "Text":
        return self._derive(self._text.upper())

    def to_title_case(self) -> "Text":
        return self._derive(self._text.title())

    def capitalize(self) -> "Text":
        return self.char_at(0).to_upper_case().concat(self.slice(1).to_lower_case())

    def upper_first(self) -> "Text":
        return self.char_at(0).to_upper_case().concat(self.slice(1))

    def lower_first(self) -> "Text":
        return self.char_at(0).to_lower_case().concat(self.slice(1))

    def swap_case(self) -> "Text":
        """Inverts the case of every cased code point, leaving the rest untouched."""
        swapped = []
        for char in self:
            if char.isupper():
                swapped.append(char.lower())
            elif char.islower():
                swapped.append(char.upper())
            else:
                swapped.append(char)
        return self._derive(*swapped)

    def pad_start(self, target_length: int, pad_string: Any = " ") -> "Text":
        missing = target_length - self._length
        pad_string = to_string(pad_string)
        if missing < 1 or pad_string == "":
            return self
        return self.prepend(self.pad(missing, pad_string, self._encoding))

    def pad_end(self, target_length: int, pad_string: Any = " ") -> "Text":
        missing = target_length - self._length
        pad_string = to_string(pad_string)
        if missing < 1 or pad_string == "":
            return self
        return self.concat(self.pad(missing, pad_string, self._encoding))

    def pad_all(self, target_length: int, pad_string: Any = " ") -> "Text":
        """Pads both ends, the end receiving the extra code point when the padding is odd."""
        missing = target_length - self._length
        if missing < 1:
            return self
        end_length = self._length + -(-missing // 2)
        return self.pad_end(end_length, pad_string).pad_start(target_length, pad_string)

    def repeat(self, times: int) -> "Text":
        if times < 1:
            return self._derive()
        if times == 1:
            return self
        return self._derive(self._text * times)

    def trim(self, *chars: Any) -> "Text":
        if not chars:
            return self._derive(self._text.strip())
        return self._derive(self._text.strip(self._merge(*chars)))

    def trim_start(self, *chars: Any) -> "Text":
        if not chars:
            return self._derive(self._text.lstrip())
        return self._derive(self._text.lstrip(self._merge(*chars)))

    def trim_end(self, *chars: Any) -> "Text":
        if not chars:
            return self._derive(self._text.rstrip())
        return self._derive(self._text.rstrip(self._merge(*chars)))

    def remove_prefix(self, prefix: Any) -> "Text":
        if not self.starts_with(prefix):
            return self
        return self.slice(len(to_string(prefix)))

    def remove_suffix(self, suffix: Any) -> "Text":
        if not self.ends_with(suffix):
            return self
        return self.slice(0, -len(to_string(suffix)))

    def reverse(self) -> "Text":
        return self._derive(*reversed(self))

    def replace(self, search: Any, replacement: Any) -> "Text":
        """Replaces the first occurrence of a substring or `Pattern`.

        `replacement` may be a callable receiving the matched text. With a `Pattern`,
        string replacements are templates and may reference groups as `\\1`.
        """
        search = self._needle(search)
        if search == "":
            return self
        if isinstance(search, Pattern):
            return self._derive_bytes(patterns.replace(search, self._buffer, self._codec, replacement, count=1))

        matched, index = self._find(search)
        if index == NOT_FOUND:
            return self
        if callable(replacement):
            replacement = replacement(matched)
        return self._derive(self.slice(0, index), replacement, self.slice(index + len(matched)))

    def replace_all(self, search: Any, replacement: Any) -> "Text":
        search = self._needle(search)
        if search == "":
            return self
        if isinstance(search, Pattern):
            return self._derive_bytes(patterns.replace(search, self._buffer, self._codec, replacement))
        if callable(replacement):
            replacement = replacement(search)
        return self._derive(self._text.replace(search, to_string(replacement)))

    def format(self, *args: Any) -> "Text":
        """printf-style formatting, using the text as the format string."""
        if not args or "%" not in self._text:
            return self
        try:
            return self._derive(self._text % args)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Can not format {self._text!r}: {e}") from e

    def split(self, separator: Any = "", limit: int = sys.maxsize) -> List["Text"]:
        """Splits on a substring or `Pattern`; the empty separator yields single code points."""
        if limit <= 0:
            return []
        separator = self._needle(separator)
        if isinstance(separator, Pattern):
            parts = [part.decode(self._codec) for part in patterns.split(separator, self._buffer, self._codec)]
        elif separator == "":
            parts = list(self)
        else:
            parts = self._text.split(separator)
        return [self._derive(part) for part in parts[:limit]]

    def expand_tabs(self, size: int = 4) -> "Text":
        return self.replace_all("\t", self.pad(size, " ", self._encoding))

    # endregion

    # region Predicates

    def equals(self, needle: Any, caseless: bool = False) -> bool:
        needle = to_string(needle)
        if caseless:
            return needle.casefold() == self._text.casefold()
        return needle == self._text

    def is_whitespace(self) -> bool:
        return self._text.isspace()

    def is_alphanumeric(self) -> bool:
        return self._text.isalnum()

    def is_alpha(self) -> bool:
        return self._text.isalpha()

    def is_numeric(self) -> bool:
        return _NUMERIC.match(self._text) is not None

    def is_digit(self) -> bool:
        return self._text.isdigit()

    def is_hexadecimal(self) -> bool:
        return bool(self._text) and all(char in _HEXDIGITS for char in self._text)

    def is_lower(self) -> bool:
        return self._text.islower()

    def is_upper(self) -> bool:
        return self._text.isupper()

    # endregion

    # region Protocols

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        if self._codec == resolve_codec(DEFAULT_ENCODING):
            return f"Text({self._text!r})"
        return f"Text({self._text!r}, encoding={self._encoding!r})"

    def __bytes__(self) -> bytes:
        return self._buffer

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[str]:
        starts = self._codepoint_starts()
        ends = np.append(starts[1:], self._size)
        for start, end in zip(starts.tolist(), ends.tolist()):
            yield self._buffer[start:end].decode(self._codec)

    def __reversed__(self) -> Iterator[str]:
        return reversed(list(self))

    def __contains__(self, needle: Any) -> bool:
        return self.contains(needle)

    def __getitem__(self, key: Union[int, SliceKey]) -> "Text":
        if isinstance(key, bool):
            raise TypeError("Text indices must be integers, slices or slice notation")
        if isinstance(key, int):
            return self.get(key)
        if isinstance(key, (str, Slice, slice)):
            return self.get_range(key)
        raise TypeError(f"Text indices must be integers, slices or slice notation, not {type(key).__name__}")

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Text):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._text)

    def __add__(self, other: Any) -> "Text":
        if not is_stringable(other):
            return NotImplemented
        return self.concat(other)

    def __radd__(self, other: Any) -> "Text":
        if not is_stringable(other):
            return NotImplemented
        return self.prepend(other)

    def __mul__(self, times: int) -> "Text":
        if not isinstance(times, int) or isinstance(times, bool):
            return NotImplemented
        return self.repeat(times)

    __rmul__ = __mul__

    # endregion
