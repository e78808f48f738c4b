# litforge/extract/content.py
"""
Content extraction for import and reference blocks.

A reference names a file plus either a tag region::

    // lit-tag: setup
    ...lines returned...
    // lit-tag: setup

or a 1-based, inclusive ``line_start``..``line_end`` range (whole file when
neither bound is given).
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from ..errors import ExtractError, TagNotFoundError
from ..models.options import Options
from ..utils.paths import resolve_path

log = logging.getLogger(__name__)


def _tag_marker(tag: str) -> "re.Pattern[str]":
    return re.compile(r"lit-tag:\s*" + re.escape(tag) + r"(?![\w-])")


def extract_tag_region(lines: List[str], tag: str, path: str = "<text>") -> str:
    """
    Return the lines strictly between the first two ``lit-tag: <tag>`` markers,
    each followed by a newline.

    Raises:
        TagNotFoundError: if the opening or closing marker is missing. The
            error's ``partial`` carries the lines captured before the miss.
    """
    marker = _tag_marker(tag)
    captured: List[str] = []
    opened = False
    for line in lines:
        if marker.search(line):
            if not opened:
                opened = True
                continue
            return "".join(ln + "\n" for ln in captured)
        if opened:
            captured.append(line)

    if not opened:
        raise TagNotFoundError(f"Could not find tag '{tag}' in file '{path}'", tag=tag, path=path)
    raise TagNotFoundError(
        f"Tag '{tag}' is not closed in file '{path}'",
        tag=tag,
        path=path,
        partial="".join(ln + "\n" for ln in captured),
    )


def extract_line_range(lines: List[str], line_start: Optional[int] = None, line_end: Optional[int] = None) -> str:
    """Return lines ``line_start``..``line_end`` (1-based, both inclusive), clamped to the file."""
    start = max(line_start or 1, 1)
    end = len(lines) if line_end is None else min(line_end, len(lines))
    if start > end:
        return ""
    return "".join(ln + "\n" for ln in lines[start - 1:end])


def resolve_source_path(path_ref: str, options: Options) -> str:
    """Absolute paths pass through; relative ones resolve against the input root."""
    return resolve_path(path_ref, options.input_path)


def extract_content(ref, options: Options) -> str:
    """
    Fetch the external content described by `ref` (any object with
    ``source_path_ref``, ``line_start``, ``line_end`` and ``tag``).

    An incomplete tag region is logged and whatever was captured is returned.

    Raises:
        ExtractError: if the reference has no path or the file cannot be read.
    """
    if not ref.source_path_ref:
        raise ExtractError("Block has no 'path' to extract content from")

    path = resolve_source_path(ref.source_path_ref, options)
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ExtractError(f"Failed to read '{path}': {e}") from e

    if ref.tag:
        try:
            return extract_tag_region(lines, ref.tag, path)
        except TagNotFoundError as e:
            log.error("%s", e)
            return e.partial
    return extract_line_range(lines, ref.line_start, ref.line_end)
