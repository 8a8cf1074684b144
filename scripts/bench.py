"""
Throughput of `Text` against the native `str` on the same haystack.

    python scripts/bench.py --needle "日本" --haystack-pattern "abc日本語" --haystack-length 1e6
    python scripts/bench.py --needle "the" --haystack-path leipzig1M.txt --encoding UTF-16
"""

import time
from typing import Optional

import fire

from textzilla import Text


def log(name: str, bytes_length: int, operator: callable):
    a = time.time_ns()
    operator()
    b = time.time_ns()
    secs = (b - a) / 1e9
    gb_per_sec = bytes_length / (1e9 * secs) if secs else float("inf")
    print(f"{name}: took {secs:} seconds ~ {gb_per_sec:.3f} GB/s")


def log_functionality(needle: str, bytes_length: int, pythonic_str: str, textzilla_text: Text):
    # The first search pays for the offset map, the rest reuse it
    log("Text.index_of (cold)", bytes_length, lambda: textzilla_text.index_of(needle))

    log("str.find", bytes_length, lambda: pythonic_str.find(needle))
    log("Text.index_of", bytes_length, lambda: textzilla_text.index_of(needle))

    log("str.contains", bytes_length, lambda: needle in pythonic_str)
    log("Text.contains", bytes_length, lambda: needle in textzilla_text)

    log("str.count", bytes_length, lambda: pythonic_str.count(needle))
    log("Text.count", bytes_length, lambda: textzilla_text.count(needle))

    log("str.split", bytes_length, lambda: pythonic_str.split(needle))
    log("Text.split", bytes_length, lambda: textzilla_text.split(needle))

    half = len(pythonic_str) // 2
    log("str[half:]", bytes_length, lambda: pythonic_str[half:])
    log("Text.slice", bytes_length, lambda: textzilla_text.slice(half))
    log("str[::-1]", bytes_length, lambda: pythonic_str[::-1])
    log("Text.reverse", bytes_length, lambda: textzilla_text.reverse())


def bench(
    needle: str,
    haystack_path: Optional[str] = None,
    haystack_pattern: Optional[str] = None,
    haystack_length: Optional[int] = None,
    encoding: str = "UTF-8",
):
    if haystack_path:
        with open(haystack_path, "r", encoding="utf-8") as f:
            pythonic_str: str = f.read()
    else:
        haystack_length = int(haystack_length)
        repetitions = haystack_length // len(haystack_pattern)
        pythonic_str: str = haystack_pattern * repetitions

    textzilla_text = Text(pythonic_str, encoding)
    log_functionality(str(needle), textzilla_text.size, pythonic_str, textzilla_text)


if __name__ == "__main__":
    fire.Fire(bench)
