# litforge/utils/__init__.py
from .gitignore import get_gitignore, is_ignored
from .paths import display_path, has_separator, resolve_path, same_path
from .text import indent_continuation, leading_whitespace, strip_one_newline

__all__ = [
    "get_gitignore",
    "is_ignored",
    "display_path",
    "has_separator",
    "resolve_path",
    "same_path",
    "indent_continuation",
    "leading_whitespace",
    "strip_one_newline",
]
