"""
Python slice notation, `start:stop:step`, as a standalone value.

    >>> Slice.parse("::-1").resolve_indices(4)
    [3, 2, 1, 0]
    >>> str(Slice.parse(":"))
    '0::'
"""

import re
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Sized, TypeVar

from textzilla.errors import InvalidArgument

T = TypeVar("T")

_NOTATION = re.compile(r"^(|-?\d+)(?::(|-?\d+))(?::(|-?\d+))?$")

# Both spellings select everything and skip the general grammar
_SELECT_ALL = (":", "::")


def _field(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    return int(value)


@dataclass(frozen=True)
class Slice:
    start: Optional[int] = None
    stop: Optional[int] = None
    step: Optional[int] = None

    @staticmethod
    def is_valid(notation: str) -> bool:
        if not isinstance(notation, str) or ":" not in notation:
            return False
        if notation in _SELECT_ALL:
            return True
        return _NOTATION.match(notation) is not None

    @classmethod
    def parse(cls, notation: str) -> "Slice":
        """Parses `start:stop:step` notation, raising `InvalidArgument` on anything else.

        Examples of valid notation: `:`, `::`, `0:1:`, `10:2:-1`, `1:`.
        """
        if not cls.is_valid(notation):
            raise InvalidArgument(f"Invalid slice [{notation}]")
        if notation in _SELECT_ALL:
            return cls(0)
        start, stop, step = _NOTATION.match(notation).groups()
        return cls(_field(start), _field(stop), _field(step))

    @classmethod
    def from_builtin(cls, value: slice) -> "Slice":
        for field in (value.start, value.stop, value.step):
            if field is not None and not isinstance(field, int):
                raise InvalidArgument(f"Slice indices must be integers or None, got {field!r}")
        return cls(value.start, value.stop, value.step)

    def iter_indices(self, length: int) -> Iterator[int]:
        """Yields the indices this slice selects from a sequence of `length` items."""
        if length <= 0:
            return
        step = 1 if self.step is None else self.step
        if step == 0:
            return

        stop = self.stop if self.stop is not None else (length if step > 0 else -1)
        start = self.start if self.start is not None else (0 if step > 0 else length - 1)

        if start < 0:
            start %= length
        # With a negative step -1 is the sentinel for "one before the first item"
        floor = -1 if step < 0 else 0
        if stop < floor:
            stop += -((stop - floor) // length) * length

        for index in range(start, stop, step):
            if step > 0 and index >= length:
                break
            if step < 0:
                if index < 0:
                    break
                if index >= length:
                    continue
            yield index

    def resolve_indices(self, length: int) -> List[int]:
        return list(self.iter_indices(length))

    def slice(self, sequence: Sequence[T]) -> List[T]:
        if not isinstance(sequence, Sized):
            raise InvalidArgument("value is not countable.")
        return [sequence[index] for index in self.iter_indices(len(sequence))]

    def to_notation(self) -> str:
        fields = (self.start, self.stop, self.step)
        return ":".join("" if field is None else str(field) for field in fields)

    def __str__(self) -> str:
        return self.to_notation()
