"""Encoding identifiers and the process-wide default."""

import codecs
import functools
import os
from typing import Final

from textzilla.errors import InvalidArgument

DEFAULT_ENCODING: Final[str] = os.environ.get("TZ_DEFAULT_ENCODING", "UTF-8")

# Without an explicit byte order Python prepends a BOM on every `encode` call,
# which would make per-code-point widths depend on position.
_BOM_FREE: Final[dict] = {
    "utf-16": "utf-16-be",
    "utf-32": "utf-32-be",
    "utf-8-sig": "utf-8",
}

# Encoded whole, each sample must be as long as its code points encoded one by one
_WIDTH_SAMPLES: Final[tuple] = ("ab", "éè", "日本", "😀🐍")


@functools.lru_cache(maxsize=None)
def _check_additive(codec: str) -> None:
    for sample in _WIDTH_SAMPLES:
        try:
            whole = len(sample.encode(codec))
            parts = sum(len(char.encode(codec)) for char in sample)
        except UnicodeEncodeError:
            continue
        except LookupError as e:
            raise InvalidArgument(f"Encoding {codec!r} is not a text encoding") from e
        if whole != parts:
            raise InvalidArgument(f"Encoding {codec!r} is stateful, code points have no fixed byte width")


def resolve_codec(encoding: str) -> str:
    """Map a user-facing encoding identifier to a Python codec name."""
    if not isinstance(encoding, str) or not encoding:
        raise InvalidArgument(f"Invalid encoding identifier {encoding!r}")
    try:
        name = codecs.lookup(encoding).name
    except LookupError as e:
        raise InvalidArgument(f"Unknown encoding {encoding!r}") from e
    codec = _BOM_FREE.get(name, name)
    _check_additive(codec)
    return codec


def is_utf8(codec: str) -> bool:
    return codec == "utf-8"
