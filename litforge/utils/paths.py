# litforge/utils/paths.py
import os


def has_separator(file_path: str) -> bool:
    """True if the path carries a directory component (either separator style)."""
    return "/" in file_path or "\\" in file_path


def resolve_path(file_path: str, base_dir: str) -> str:
    """
    Resolve `file_path` to a normalized absolute path.
    Absolute paths pass through; relative ones are joined onto `base_dir`.
    """
    if os.path.isabs(file_path):
        return os.path.normpath(file_path)
    return os.path.abspath(os.path.join(base_dir, file_path))


def same_path(a: str, b: str, base_dir: str) -> bool:
    """Compare two paths by their resolved absolute form, not by string prefix."""
    return os.path.normcase(resolve_path(a, base_dir)) == os.path.normcase(resolve_path(b, base_dir))


def display_path(file_path: str, root_dir: str, absolute: bool = False) -> str:
    """
    Render a path for provenance comments: absolute, or relative to `root_dir`
    with forward slashes. Falls back to absolute when no relative form exists
    (different drives on Windows).
    """
    full = resolve_path(file_path, root_dir)
    if absolute:
        return full
    try:
        return os.path.relpath(full, os.path.abspath(root_dir)).replace(os.sep, "/")
    except ValueError:
        return full
