# litforge/extract/lexer.py
"""
Line-oriented lexer turning one literate document into typed blocks.

Two block syntaxes are recognized:

1. Literate fences: an opening ```` ``` ```` line carrying ``lit-<key>:<value>``
   attribute groups, e.g.::

       ```js lit-type:code lit-name:greet
       console.log("hi")
       ```

   Fences without a ``lit-`` group are ordinary code and are skipped.

2. HTML comment markers (outside fences only)::

       <!-- block: intro -->
       ...
       <!-- end_block -->

       <!-- pull_from: other.md, block: intro -->
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..models.blocks import (
    Block,
    CodeBlock,
    ConfigurationBlock,
    CustomBlock,
    ImportBlock,
    InjectionBlock,
    OutputBlock,
    PullFromBlock,
    ReferenceBlock,
)
from ..models.fence import FenceHeader
from .directives import parse_directives

log = logging.getLogger(__name__)

FENCE = "```"
END_BLOCK_MARKER = "<!-- end_block -->"

# 'lit-' only counts at the start of an attribute group, so a file value such
# as 'src/lit-parser.js' is not split apart.
_LIT_GROUP_RE = re.compile(r"(?<=[\s`])lit-")
_CUSTOM_OPEN_RE = re.compile(r"^<!--\s*block:\s*(?P<name>.+?)\s*-->")
PULL_FROM_RE = re.compile(
    r"^\s*<!--\s*pull_from:\s*(?P<path>[^,]+?)\s*,\s*block:\s*(?P<name>[^,]+?)\s*"
    r"(?P<processed>,\s*processed:\s*true\s*)?-->"
)


def pull_from_marker(file_path: str, block_name: str, processed: bool = False) -> str:
    """Canonical text of a pull_from marker."""
    suffix = ", processed: true" if processed else ""
    return f"<!-- pull_from: {file_path}, block: {block_name}{suffix} -->"


@dataclass(frozen=True)
class LexResult:
    blocks: Tuple[Block, ...]
    # (start, end) character offsets of every literate fence, fences included
    spans: Tuple[Tuple[int, int], ...]


# =============================
# Fence headers
# =============================

def is_literate_fence(line: str) -> bool:
    return _LIT_GROUP_RE.search(line) is not None


def parse_fence_header(line: str) -> FenceHeader:
    """
    Parse the ``lit-key:value`` groups of an opening fence line.

    Groups are order-independent and a repeated key overwrites the earlier
    value. A group without ':' is ignored. ``file`` keeps everything after its
    first ':' (so ``C:\\src\\a.js`` survives); other keys stop at the next ':'.
    """
    header = FenceHeader()
    for group in _LIT_GROUP_RE.split(line)[1:]:
        key, sep, value = group.partition(":")
        if not sep:
            continue
        key = key.strip()
        if key == "file":
            header.file = value.strip()
        elif key == "type":
            header.type = value.split(":", 1)[0].strip()
        elif key == "name":
            header.name = value.split(":", 1)[0].strip()
        elif key:
            header.extra[key] = value.split(":", 1)[0].strip()
    return header


# =============================
# Block construction
# =============================

def _code(h: FenceHeader, common: dict) -> Optional[Block]:
    if not h.name:
        log.warning("Code block at %s:%d has no lit-name; skipped", common["source_file"], common["start_line"])
        return None
    return CodeBlock(**common, name=h.name)


def _output(h: FenceHeader, common: dict) -> Optional[Block]:
    if not h.file:
        log.warning("Output block at %s:%d has no lit-file; skipped", common["source_file"], common["start_line"])
        return None
    return OutputBlock(**common, target_path=h.file, relative_dir=os.path.dirname(common["source_file"]))


def _injection(h: FenceHeader, common: dict) -> Optional[Block]:
    if not h.name or not h.file:
        log.warning(
            "Injection block at %s:%d needs lit-name and lit-file; skipped",
            common["source_file"], common["start_line"],
        )
        return None
    return InjectionBlock(**common, name=h.name, target_path=h.file)


def _config(h: FenceHeader, common: dict) -> Optional[Block]:
    return ConfigurationBlock(**common, name=h.name or "")


def _import(h: FenceHeader, common: dict) -> Optional[Block]:
    d = parse_directives(common["body"])
    return ImportBlock(
        **common,
        source_path_ref=d.path or h.file,
        line_start=d.line_start,
        line_end=d.line_end,
        tag=d.tag,
    )


def _reference(h: FenceHeader, common: dict) -> Optional[Block]:
    if not h.name:
        log.warning("Reference block at %s:%d has no lit-name; skipped", common["source_file"], common["start_line"])
        return None
    d = parse_directives(common["body"])
    return ReferenceBlock(
        **common,
        name=h.name,
        source_path_ref=d.path or h.file,
        line_start=d.line_start,
        line_end=d.line_end,
        tag=d.tag,
    )


_BUILDERS: Dict[str, Callable[[FenceHeader, dict], Optional[Block]]] = {
    "code": _code,
    "output": _output,
    "injection": _injection,
    "config": _config,
    "import": _import,
    "reference": _reference,
}


def build_block(header: FenceHeader, body: str, source_file: str, start_line: int, end_line: int) -> Optional[Block]:
    """Construct the block variant selected by ``header.type``; None if unknown."""
    builder = _BUILDERS.get(header.type or "")
    if builder is None:
        log.debug("Unknown lit-type %r at %s:%d; skipped", header.type, source_file, start_line)
        return None
    common = {"source_file": source_file, "body": body, "start_line": start_line, "end_line": end_line}
    return builder(header, common)


# =============================
# Lexer
# =============================

def lex_document(text: str, source_file: str) -> LexResult:
    """
    Scan `text` once, line by line, and return its blocks in document order.

    Line numbers are 1-based and include the fence/marker lines. Any line
    starting with ``` closes an open fence, whatever follows it, so fences
    cannot be nested inside a literate fence.
    """
    source_file = os.path.abspath(source_file)
    blocks: List[Block] = []
    spans: List[Tuple[int, int]] = []

    in_fence = False
    header: Optional[FenceHeader] = None  # set only while inside a literate fence
    buffer: List[str] = []
    fence_line = fence_offset = 0

    custom_name: Optional[str] = None
    custom_buffer: List[str] = []
    custom_line = 0

    offset = 0
    for number, line in enumerate(text.split("\n"), start=1):
        line_offset = offset
        offset += len(line) + 1

        if line.startswith(FENCE):
            if not in_fence:
                in_fence = True
                fence_line, fence_offset = number, line_offset
                header = parse_fence_header(line) if is_literate_fence(line) else None
                buffer = []
            else:
                in_fence = False
                if header is not None:
                    block = build_block(header, "".join(buffer), source_file, fence_line, number)
                    if block is not None:
                        blocks.append(block)
                    spans.append((fence_offset, min(offset, len(text))))
                header = None
            if custom_name is not None:
                custom_buffer.append(line + "\n")
            continue

        if in_fence:
            if header is not None:
                buffer.append(line + "\n")
            if custom_name is not None:
                custom_buffer.append(line + "\n")
            continue

        if custom_name is None:
            m = _CUSTOM_OPEN_RE.match(line)
            if m:
                custom_name, custom_line, custom_buffer = m.group("name"), number, []
                continue
        elif line.startswith(END_BLOCK_MARKER):
            blocks.append(CustomBlock(
                source_file=source_file,
                body="".join(custom_buffer),
                start_line=custom_line,
                end_line=number,
                block_name=custom_name,
            ))
            custom_name = None
            continue

        m = PULL_FROM_RE.match(line)
        if m and not m.group("processed"):
            blocks.append(PullFromBlock(
                source_file=source_file,
                body="",
                start_line=number,
                end_line=number,
                file_path=m.group("path"),
                block_name=m.group("name"),
            ))
        if custom_name is not None:
            custom_buffer.append(line + "\n")

    if in_fence and header is not None:
        log.warning("Unterminated literate fence at %s:%d; skipped", source_file, fence_line)
    if custom_name is not None:
        log.warning("Unterminated block '%s' at %s:%d; skipped", custom_name, source_file, custom_line)

    return LexResult(blocks=tuple(blocks), spans=tuple(spans))
