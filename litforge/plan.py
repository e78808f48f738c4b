import logging
import os
import re
from typing import Callable, List, Sequence, Tuple

from .models.blocks import OutputBlock
from .models.options import Options
from .store import BlockStore
from .utils.paths import has_separator, resolve_path, same_path

log = logging.getLogger(__name__)


def _target_relative(block: OutputBlock, root: str) -> str:
    """Target path with the directory-relative default folded in, relative to `root`."""
    target = block.target_path
    if os.path.isabs(target) or has_separator(target):
        return target
    try:
        doc_dir = os.path.relpath(block.relative_dir, os.path.abspath(root))
    except ValueError:
        doc_dir = block.relative_dir
    return os.path.normpath(os.path.join(doc_dir, target))


def target_path(block: OutputBlock, root: str) -> str:
    """Absolute target of an output block, ignoring any output_path prefix."""
    return resolve_path(_target_relative(block, root), root)


def output_destination(block: OutputBlock, options: Options) -> str:
    """Absolute path the output writer creates: target plus the output_path prefix."""
    relative = _target_relative(block, options.input_path)
    if options.output_path:
        relative = os.path.join(options.output_path, relative)
    return resolve_path(relative, options.input_path)


def filter_output_blocks(
    blocks: Sequence[OutputBlock],
    include: Sequence[str],
    ignore: Sequence[str],
    *,
    root: str = ".",
) -> List[OutputBlock]:
    """
    Apply include/ignore rules to output blocks.

    With a non-empty `include`, a block is kept when its target or its source
    document matches an entry. `ignore` then drops every block whose target
    or source document matches an entry.

    An empty list is a no-op. Paths are compared in resolved absolute form,
    so './a.md' and 'a.md' under the same root are equal.
    """
    keys: Tuple[Callable[[OutputBlock], str], ...] = (
        lambda b: target_path(b, root),
        lambda b: b.source_file,
    )

    def matches(block: OutputBlock, paths: Sequence[str]) -> bool:
        return any(same_path(key(block), p, root) for key in keys for p in paths)

    result = list(blocks)
    if include:
        result = [b for b in result if matches(b, include)]
    if ignore:
        result = [b for b in result if not matches(b, ignore)]
    return result


def plan_outputs(store: BlockStore, options: Options) -> List[OutputBlock]:
    """
    Select the output blocks this run writes: include/ignore rules from
    configuration first, then the ``output_file``/``md_file`` narrowing.
    """
    root = options.input_path
    blocks = list(store.blocks_of_kind("output"))
    planned = filter_output_blocks(blocks, options.include_files, options.ignore_files, root=root)
    if len(planned) != len(blocks):
        log.info("  - Include/ignore rules kept %d of %d output blocks", len(planned), len(blocks))

    if options.output_file:
        wanted = options.output_file
        planned = [
            b for b in planned
            if b.target_path == wanted or same_path(target_path(b, root), wanted, root)
        ]
    if options.md_file:
        pattern = re.compile(options.md_file)
        planned = [b for b in planned if pattern.search(b.source_file)]
    return planned
