# litforge/commit/writers.py
"""
The four ways resolved blocks reach the filesystem.

- outputs:    create (or overwrite) a file per output block
- injections: replace ``{{{ name }}}`` inside an existing file
- imports:    splice external content into the literate document itself
- pull_from:  copy a ``<!-- block: NAME -->`` region after its pull_from marker

Each writer builds Change values and hands them to commit_changes. Per-block
problems are logged and recorded as failures; they never stop the run.
"""
from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..errors import ExtractError, InjectionError
from ..extract.content import extract_content
from ..extract.lexer import FENCE, PULL_FROM_RE, is_literate_fence, lex_document, pull_from_marker
from ..models.blocks import Block, CustomBlock, ImportBlock, InjectionBlock, OutputBlock
from ..models.options import Options
from ..plan import output_destination
from ..resolve import PLACEHOLDER_RE, render_block, resolve_placeholders
from ..scan import read_document
from ..store import BlockStore
from ..utils.paths import resolve_path
from ..utils.text import leading_whitespace, strip_one_newline
from .core import Change, CommitSummary, commit_changes

log = logging.getLogger(__name__)


def _group_by_document(blocks: Iterable[Block]) -> Dict[str, List[Block]]:
    grouped: Dict[str, List[Block]] = {}
    for block in blocks:
        grouped.setdefault(block.source_file, []).append(block)
    return grouped


def _commit(options: Options, changes: List[Change], dry_run: bool) -> CommitSummary:
    return commit_changes(
        options.input_path,
        changes,
        atomic=options.atomic,
        dry_run=dry_run,
        backup_ext=options.backup_ext,
    )


def _fail(summary: CommitSummary, path: str, message: str) -> None:
    log.error("  - ERROR: %s", message)
    summary.failed.append(path)
    summary.errors[path] = message


# =============================
# Output blocks
# =============================

def write_outputs(
    blocks: Sequence[OutputBlock],
    store: BlockStore,
    options: Options,
    *,
    dry_run: bool = False,
) -> CommitSummary:
    """Resolve every output block and write it to its destination, overwriting."""
    log.info("Found %d output blocks.", len(blocks))
    changes = []
    for block in blocks:
        content = resolve_placeholders(block.body, store, options)
        changes.append(Change(action="create", path=output_destination(block, options), new_content=content))
    summary = _commit(options, changes, dry_run)
    for path in summary.success:
        log.info("Wrote file %s", path)
    return summary


# =============================
# Injection blocks
# =============================

def inject(content: str, block: InjectionBlock, store: BlockStore, options: Options) -> str:
    """
    Replace the first ``{{{ name }}}`` in `content` with the rendered block.
    Continuation lines take the indentation of the placeholder's line.

    Raises:
        InjectionError: if `content` has no placeholder for ``block.name``.
    """
    match = next((m for m in PLACEHOLDER_RE.finditer(content) if m.group("token") == block.name), None)
    if match is None:
        raise InjectionError(f"Placeholder for '{block.name}' not found")

    line_start = content.rfind("\n", 0, match.start()) + 1
    indent = leading_whitespace(content[line_start:match.start()])
    rendered = render_block(block, store, options, indent=indent)
    return content[:match.start()] + rendered + content[match.end():]


def write_injections(store: BlockStore, options: Options, *, dry_run: bool = False) -> CommitSummary:
    """Patch each injection block's target file in place."""
    blocks = store.blocks_of_kind("injection")
    log.info("Found %d injection blocks.", len(blocks))
    summary = CommitSummary(dry_run=dry_run)
    # Several injections may target one file; patch the latest text each time.
    pending: Dict[str, Change] = {}

    for block in blocks:
        target = resolve_path(block.target_path, options.input_path)
        change = pending.get(target)
        if change is None:
            if not os.path.isfile(target):
                _fail(summary, target, f"Output file '{target}' does not exist.")
                continue
            original = read_document(target)
            if original is None:
                _fail(summary, target, f"Could not read '{target}'.")
                continue
            change = Change(action="modify", path=target, new_content=original, original_content=original)
        try:
            change.new_content = inject(change.new_content, block, store, options)
        except InjectionError as e:
            _fail(summary, target, f"{e} in '{target}'.")
            continue
        pending[target] = change
        log.info("Injected code block '%s' into '%s'.", block.name, target)

    summary.merge(_commit(options, list(pending.values()), dry_run))
    return summary


# =============================
# Import blocks
# =============================

def _plain_fence(opening_line: str) -> str:
    """Opening fence with the lit- attributes dropped (keeps e.g. ```js)."""
    if not is_literate_fence(opening_line):
        return opening_line.rstrip()
    head = opening_line.split("lit-", 1)[0].rstrip()
    return head or FENCE


def splice_imports(text: str, imports: Sequence[Tuple[ImportBlock, str]]) -> str:
    """
    Replace each import block's fenced span with a plain fence around its
    extracted content. Applied bottom-up so earlier line numbers stay valid.
    """
    lines = text.split("\n")
    for block, content in sorted(imports, key=lambda item: item[0].start_line, reverse=True):
        start, end = block.start_line - 1, block.end_line - 1
        if end >= len(lines) or not lines[start].startswith(FENCE) or not lines[end].startswith(FENCE):
            raise ExtractError(f"Import block at lines {block.start_line}-{block.end_line} no longer matches the document")
        lines[start:end + 1] = [_plain_fence(lines[start])] + content.splitlines() + [FENCE]
    return "\n".join(lines)


def write_imports(store: BlockStore, options: Options, *, dry_run: bool = False) -> CommitSummary:
    """Rewrite each document that holds import blocks, once per document."""
    blocks = store.blocks_of_kind("import")
    log.info("Found %d import blocks.", len(blocks))
    summary = CommitSummary(dry_run=dry_run)
    changes = []

    for document, doc_blocks in _group_by_document(blocks).items():
        imports: List[Tuple[ImportBlock, str]] = []
        for block in doc_blocks:
            try:
                content = extract_content(block, options)
            except ExtractError as e:
                _fail(summary, document, f"Import at {document}:{block.start_line}: {e}")
                continue
            if not content:
                log.warning("  - Import at %s:%d extracted nothing; left as is", document, block.start_line)
                continue
            imports.append((block, content))
        if not imports:
            continue

        original = read_document(document)
        if original is None:
            _fail(summary, document, f"Could not read '{document}'.")
            continue
        try:
            updated = splice_imports(original, imports)
        except ExtractError as e:
            _fail(summary, document, f"{e} ('{document}')")
            continue
        changes.append(Change(action="modify", path=document, new_content=updated, original_content=original))
        for block, _content in imports:
            log.info("Imported '%s' into '%s'.", block.source_path_ref, document)

    summary.merge(_commit(options, changes, dry_run))
    return summary


# =============================
# Pull-from markers
# =============================

def apply_pull_from(text: str, file_path: str, block_name: str, body: str) -> Optional[str]:
    """
    Insert `body` after the first pull_from marker for (`file_path`, `block_name`)
    and flag the marker ``processed: true``.

    Returns None, leaving `text` alone, when the marker is absent or a
    processed marker for the same pair already exists.
    """
    lines = text.split("\n")
    target: Optional[int] = None
    for i, line in enumerate(lines):
        m = PULL_FROM_RE.match(line)
        if not m or m.group("path") != file_path or m.group("name") != block_name:
            continue
        if m.group("processed"):
            return None
        if target is None:
            target = i
    if target is None:
        return None

    line = lines[target]
    m = PULL_FROM_RE.match(line)
    marker = leading_whitespace(line) + pull_from_marker(file_path, block_name, processed=True) + line[m.end():]
    inserted = strip_one_newline(body).split("\n") if body else []
    lines[target:target + 1] = [marker] + inserted
    return "\n".join(lines)


def _find_custom_block(store: BlockStore, pull_path: str, name: str) -> Optional[CustomBlock]:
    block = store.find_qualified("custom", pull_path, name)
    if block is not None:
        return block
    # The pulled document may sit outside the scanned tree.
    text = read_document(pull_path)
    if text is None:
        return None
    for candidate in lex_document(text, pull_path).blocks:
        if isinstance(candidate, CustomBlock) and candidate.block_name == name:
            block = candidate
    return block


def write_pull_from(store: BlockStore, options: Options, *, dry_run: bool = False) -> CommitSummary:
    """Apply every pending pull_from marker, writing each document once."""
    blocks = store.blocks_of_kind("pull_from")
    log.info("Processing %d pull_from blocks.", len(blocks))
    summary = CommitSummary(dry_run=dry_run)
    changes = []

    for document, doc_blocks in _group_by_document(blocks).items():
        original = read_document(document)
        if original is None:
            _fail(summary, document, f"Could not read '{document}'.")
            continue
        text = original
        for pull in doc_blocks:
            pull_path = resolve_path(pull.file_path, os.path.dirname(document))
            if not os.path.isfile(pull_path):
                _fail(summary, document, f"Pull file '{pull_path}' does not exist.")
                continue
            custom = _find_custom_block(store, pull_path, pull.block_name)
            if custom is None:
                _fail(summary, document, f"Block '{pull.block_name}' not found in '{pull_path}'.")
                continue
            updated = apply_pull_from(text, pull.file_path, pull.block_name, custom.body)
            if updated is None:
                log.info("Block '%s' from '%s' already processed in '%s'.", pull.block_name, pull_path, document)
                continue
            text = updated
            log.info("Pulled block '%s' from '%s' into '%s'.", pull.block_name, pull_path, document)
        if text != original:
            changes.append(Change(action="modify", path=document, new_content=text, original_content=original))

    summary.merge(_commit(options, changes, dry_run))
    return summary
