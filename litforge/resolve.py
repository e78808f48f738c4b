# litforge/resolve.py
"""
Placeholder expansion.

A placeholder ``{{{ name }}}`` (or ``{{{ source.md:name }}}``) is replaced by
the body of the matching reference or code block, itself fully expanded.
Lines of the replacement after the first inherit the leading whitespace of
the line the placeholder sits on::

    def main():
        {{{ body }}}

expands a two-line ``body`` block into two lines indented by four spaces.
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from ._logging import resolve_logger
from .errors import CyclicReferenceError, ExtractError, UnresolvedReferenceError
from .extract.content import extract_content
from .models.blocks import Block, ReferenceBlock, block_name
from .models.options import Options
from .store import BlockStore
from .utils.paths import display_path
from .utils.text import indent_continuation, leading_whitespace, strip_one_newline

log = logging.getLogger(__name__)

__all__ = ["PLACEHOLDER_RE", "placeholder", "provenance_header", "resolve_placeholders", "render_block"]

PLACEHOLDER_RE = re.compile(r"\{\{\{\s*(?P<token>.+?)\s*\}\}\}")

# Reference blocks shadow code blocks of the same name.
_LOOKUP_KINDS = ("reference", "code")


def placeholder(name: str) -> str:
    """Canonical placeholder text for `name`."""
    return "{{{ " + name + " }}}"


def provenance_header(block: Block, options: Options) -> str:
    """The two-line ``// Source:`` / ``// Anchor:`` header for `block`."""
    source = display_path(block.source_file, options.input_path, options.output_source_absolute_paths)
    return f"// Source: {source}\n// Anchor: {block_name(block)}\n"


class _Expander:
    def __init__(self, store: BlockStore, options: Options, log) -> None:
        self.store = store
        self.options = options
        self.log = log
        # (kind, source_file, name) of every block currently being expanded
        self._stack: List[Tuple[str, str, str]] = []

    def lookup(self, token: str) -> Optional[Block]:
        for kind in _LOOKUP_KINDS:
            block = self.store.find_by_name(kind, token)
            if block is not None:
                return block
        # Qualified form; the source may itself contain ':' (drive letters).
        source, sep, name = token.rpartition(":")
        if sep and source.strip() and name.strip():
            for kind in _LOOKUP_KINDS:
                block = self.store.find_qualified(kind, source.strip(), name.strip(), self.options.input_path)
                if block is not None:
                    return block
        return None

    def raw_text(self, block: Block) -> Optional[str]:
        if isinstance(block, ReferenceBlock):
            try:
                return extract_content(block, self.options)
            except ExtractError as e:
                log.error("Reference '%s' from %s: %s", block.name, block.source_file, e)
                return None
        return block.body

    def render(self, block: Block) -> Optional[str]:
        """Provenance header (if enabled) plus the block's fully expanded body."""
        name = block_name(block) or ""
        key = (block.kind, block.source_file, name)
        if key in self._stack:
            cycle = [k[2] for k in self._stack[self._stack.index(key):]] + [name]
            raise CyclicReferenceError(cycle)

        raw = self.raw_text(block)
        if raw is None:
            return None

        self._stack.append(key)
        try:
            body = strip_one_newline(self.expand(raw))
        finally:
            self._stack.pop()

        if self.options.output_source:
            return provenance_header(block, self.options) + body
        return body

    def unresolved(self, token: str, line_number: int) -> None:
        policy = self.options.unresolved
        if policy == "error":
            raise UnresolvedReferenceError(token, line_number)
        if policy == "warn":
            where = f" inside '{self._stack[-1][2]}'" if self._stack else ""
            log.warning("Unresolved placeholder %s%s (line %d)", placeholder(token), where, line_number)

    def expand(self, text: str) -> str:
        lines = text.split("\n")
        for number, line in enumerate(lines, start=1):
            if "{{{" not in line:
                continue
            indent = leading_whitespace(line)

            def _substitute(m: "re.Match[str]") -> str:
                token = m.group("token")
                block = self.lookup(token)
                if block is None:
                    # Filled in later by the injection writer.
                    if self.store.find_by_name("injection", token) is None:
                        self.unresolved(token, number)
                    return m.group(0)
                replacement = self.render(block)
                if replacement is None:
                    return m.group(0)
                self.log.debug(f"  - {placeholder(token)} -> {block.kind} block from {block.source_file}")
                return indent_continuation(replacement, indent)

            lines[number - 1] = PLACEHOLDER_RE.sub(_substitute, line)
        return "\n".join(lines)


def resolve_placeholders(
    body: str,
    store: BlockStore,
    options: Options,
    *,
    logger=None,
    log: bool = False,
) -> str:
    """
    Expand every placeholder in `body` that names a block in `store`.

    Text without placeholders is returned unchanged. Unknown names are handled
    according to ``options.unresolved``.

    Raises:
        CyclicReferenceError: if a block's expansion reaches itself again.
        UnresolvedReferenceError: for an unknown name under the 'error' policy.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    return _Expander(store, options, log).expand(body)


def render_block(
    block: Block,
    store: BlockStore,
    options: Options,
    *,
    indent: str = "",
    logger=None,
    log: bool = False,
) -> Optional[str]:
    """
    Render `block` as it would replace a placeholder on a line indented by
    `indent`: provenance header, expanded body, continuation lines indented.
    Returns None when the block's content cannot be read.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)
    rendered = _Expander(store, options, log).render(block)
    if rendered is None:
        return None
    return indent_continuation(rendered, indent)
