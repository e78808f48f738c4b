import pytest

from litforge.utils.text import indent_continuation, leading_whitespace, strip_one_newline


@pytest.mark.parametrize(
    "line, expected",
    [
        ("code", ""),
        ("    code", "    "),
        ("\t\tcode", "\t\t"),
        (" \t code", " \t "),
        ("   ", "   "),
    ],
)
def test_leading_whitespace_preserves_mixture(line, expected):
    assert leading_whitespace(line) == expected


def test_indent_continuation_skips_first_line():
    assert indent_continuation("a\nb\nc", "  ") == "a\n  b\n  c"


def test_indent_continuation_noop_cases():
    assert indent_continuation("single", "    ") == "single"
    assert indent_continuation("a\nb", "") == "a\nb"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("a\n", "a"),
        ("a\n\n", "a\n"),
        ("a\r\n", "a"),
        ("a", "a"),
        ("", ""),
    ],
)
def test_strip_one_newline(text, expected):
    assert strip_one_newline(text) == expected
