from .content import extract_content, extract_line_range, extract_tag_region, resolve_source_path
from .directives import Directives, parse_directives
from .lexer import (
    PULL_FROM_RE,
    LexResult,
    build_block,
    is_literate_fence,
    lex_document,
    parse_fence_header,
    pull_from_marker,
)

__all__ = [
    "extract_content",
    "extract_line_range",
    "extract_tag_region",
    "resolve_source_path",
    "Directives",
    "parse_directives",
    "PULL_FROM_RE",
    "LexResult",
    "build_block",
    "is_literate_fence",
    "lex_document",
    "parse_fence_header",
    "pull_from_marker",
]
