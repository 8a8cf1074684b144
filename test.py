from typing import Optional
from random import choice, randint

import pytest

from textzilla import Text

# Two letters of every UTF-8 width keep byte and code-point offsets apart
ALPHABET = "ab" + "éß" + "日本" + "😀🐍"


def get_random_string(length: Optional[int] = None, variability: Optional[int] = None) -> str:
    if length is None:
        length = randint(3, 300)
    if variability is None:
        variability = len(ALPHABET)
    return "".join(choice(ALPHABET[:variability]) for _ in range(length))


def check_identical(native: str, big: Text, needle: Optional[str] = None):
    if needle is None:
        part_offset = randint(0, len(native) - 1)
        part_length = randint(1, len(native) - part_offset)
        needle = native[part_offset : part_offset + part_length]

    present_in_native: bool = needle in native
    present_in_big = needle in big
    assert present_in_native == present_in_big
    assert native.find(needle) == big.index_of(needle)
    assert native.count(needle) == big.count(needle)
    assert native.split(needle) == big.split(needle)


def test_basic():
    pattern = "aé日"
    native = "aé日aé日aé日"
    big = Text(native)

    check_identical(native, big, pattern)


@pytest.mark.repeat(10)
@pytest.mark.parametrize("encoding", ["UTF-8", "UTF-16"])
def test_random_needles(encoding: str):
    native = get_random_string(length=100)
    big = Text(native, encoding)
    for _ in range(20):
        check_identical(native, big)


@pytest.mark.parametrize("pattern_length", [1, 2, 3])
@pytest.mark.parametrize("haystack_length", range(1, 100))
def test_fuzzy(pattern_length: int, haystack_length: int):
    native = get_random_string(variability=4, length=haystack_length)
    big = Text(native)

    for _ in range(haystack_length // pattern_length):
        pattern = get_random_string(variability=4, length=pattern_length)
        check_identical(native, big, pattern)
