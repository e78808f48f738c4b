import re

_LEADING_WS_RE = re.compile(r"^[ \t]*")


def leading_whitespace(line: str) -> str:
    """Return the run of spaces/tabs at the start of `line`, exactly as written."""
    return _LEADING_WS_RE.match(line).group(0)


def indent_continuation(text: str, prefix: str) -> str:
    """
    Prefix every line of `text` after the first with `prefix`.
    The first line is spliced in place of a placeholder, so it already sits
    after the call-site indentation.
    """
    if not prefix or "\n" not in text:
        return text
    first, *rest = text.split("\n")
    return "\n".join([first] + [prefix + line for line in rest])


def strip_one_newline(text: str) -> str:
    """Drop a single trailing newline (block bodies store one per line)."""
    if text.endswith("\r\n"):
        return text[:-2]
    if text.endswith("\n"):
        return text[:-1]
    return text
