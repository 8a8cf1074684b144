import re

import pytest

from textzilla import Pattern, PatternInvalid, Text, is_valid_pattern
from textzilla.patterns import as_pattern, execute, match_with_byte_offset, replace, split


@pytest.mark.parametrize(
    "notation, source, flags",
    [
        ("/abc/", "abc", 0),
        ("#a/b#", "a/b", 0),
        ("%\\d+%", "\\d+", 0),
        ("/abc/i", "abc", re.IGNORECASE),
        ("/^a.b$/ms", "^a.b$", re.MULTILINE | re.DOTALL),
        ("/a b/x", "a b", re.VERBOSE),
        ("/a/b/", "a/b", 0),
    ],
)
def test_notation(notation: str, source: str, flags: int):
    pattern = Pattern.of(notation)
    assert pattern.source == source
    assert pattern.flags & flags == flags


@pytest.mark.parametrize("notation", ["abc", "", "/", "/abc", "/abc/q", "/(unclosed/", "@abc@"])
def test_notation_rejects_invalid(notation: str):
    assert not is_valid_pattern(notation)
    with pytest.raises(PatternInvalid):
        Pattern.of(notation)


def test_pattern_invalid_is_a_value_error():
    with pytest.raises(ValueError):
        Pattern.of("/[a-/")


def test_compiled_patterns():
    compiled = re.compile(r"\w+")
    assert Pattern.of(compiled).regex is compiled
    assert Pattern.of(Pattern.of(compiled)) == Pattern.of(compiled)
    assert is_valid_pattern(compiled)
    with pytest.raises(PatternInvalid):
        Pattern.of(re.compile(rb"\w+"))
    with pytest.raises(PatternInvalid):
        Pattern.of(42)


def test_pattern_equality():
    assert Pattern.of("/a+/") == Pattern.compile("a+")
    assert Pattern.of("/a+/") != Pattern.of("/a+/i")
    assert len({Pattern.of("/a+/"), Pattern.compile("a+")}) == 1
    assert repr(Pattern.compile("a+")) == "Pattern('a+')"


def test_needles_are_literal_by_default():
    assert as_pattern("/abc/") is None
    assert as_pattern(Pattern.of("/abc/")) == Pattern.of("/abc/")
    assert isinstance(as_pattern(re.compile("abc")), Pattern)


def test_execute():
    subject = "a1 b22 c333".encode("utf-8")
    pattern = Pattern.of("/([a-z])(\\d+)/")
    assert execute(pattern, subject, "utf-8") == [["a1", "a", "1"]]
    assert execute(pattern, subject, "utf-8", limit=2) == [["a1", "a", "1"], ["b22", "b", "22"]]
    assert len(execute(pattern, subject, "utf-8", limit=0)) == 3
    assert execute(Pattern.of("/z/"), subject, "utf-8") == []


def test_execute_unmatched_groups_are_empty():
    assert execute(Pattern.of("/(a)|(b)/"), b"b", "utf-8") == [["b", "", "b"]]


@pytest.mark.parametrize("codec", ["utf-8", "utf-16-be", "utf-32-be"])
def test_match_byte_offsets(codec: str):
    subject = "日本語 text".encode(codec)
    width = len("日".encode(codec))
    pattern = Pattern.of("/t\\w+/")

    matched, byte_offset = match_with_byte_offset(pattern, subject, codec)
    assert matched == "text".encode(codec)
    assert byte_offset == len("日本語 ".encode(codec))

    # Resuming from the middle of the subject still reports absolute offsets
    matched, byte_offset = match_with_byte_offset(Pattern.of("/\\w/"), subject, codec, start_byte=width)
    assert matched == "本".encode(codec)
    assert byte_offset == width

    assert match_with_byte_offset(Pattern.of("/xyz/"), subject, codec) is None


def test_dot_consumes_whole_code_points():
    matched, byte_offset = match_with_byte_offset(Pattern.of("/a./"), "xa😀".encode("utf-8"), "utf-8")
    assert matched.decode("utf-8") == "a😀"
    assert byte_offset == 1


def test_replace():
    subject = "naïve café".encode("utf-8")
    assert replace(Pattern.of("/[ïé]/"), subject, "utf-8", "_") == "na_ve caf_".encode("utf-8")
    assert replace(Pattern.of("/[ïé]/"), subject, "utf-8", "_", count=1) == "na_ve café".encode("utf-8")
    assert replace(Pattern.of("/(\\w+) (\\w+)/"), subject, "utf-8", "\\2 \\1") == "café naïve".encode("utf-8")


def test_replace_with_callable():
    subject = b"a1b2"
    assert replace(Pattern.of("/\\d/"), subject, "utf-8", lambda found: int(found) * 10) == b"a10b20"
    assert replace(Pattern.of("/\\d/"), subject, "utf-8", lambda found: None) == b"ab"


def test_replace_with_stringable_template():
    assert replace(Pattern.of("/\\d/"), b"a1b2", "utf-8", 7) == b"a7b7"
    assert replace(Pattern.of("/\\d/"), b"a1b2", "utf-8", Text("-")) == b"a-b-"
    assert replace(Pattern.of("/\\d/"), b"a1b2", "utf-8", None) == b"ab"


def test_replace_rejects_bad_template():
    with pytest.raises(PatternInvalid):
        replace(Pattern.of("/a/"), b"abc", "utf-8", "\\9")


def test_split():
    assert split(Pattern.of("/\\s*,\\s*/"), "日 , 本,語".encode("utf-8"), "utf-8") == [
        "日".encode("utf-8"),
        "本".encode("utf-8"),
        "語".encode("utf-8"),
    ]
    # Capturing groups are kept between the parts, unmatched ones are dropped
    assert split(Pattern.of("/(-)|(\\+)/"), b"a-b", "utf-8") == [b"a", b"-", b"b"]


def test_text_with_patterns():
    big = Text("2024-01-31 and 1999-12-01")
    date = Pattern.of("/(\\d{4})-(\\d{2})-(\\d{2})/")
    assert big.index_of(date) == 0
    assert big.index_of(date, 1) == 15
    assert big.last_index_of(date) == 15
    assert big.count(date) == 2
    assert big.matches(date) == ["2024-01-31", "2024", "01", "31"]
    assert [groups[1] for groups in big.match_all(date)] == ["2024", "1999"]
    assert big.replace_all(date, "\\3.\\2.\\1") == "31.01.2024 and 01.12.1999"
    assert big.split(Pattern.of("/ and /")) == ["2024-01-31", "1999-12-01"]
    assert big.contains(re.compile("and"))
