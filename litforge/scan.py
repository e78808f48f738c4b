"""Document discovery: walk the input tree and yield literate documents."""
from __future__ import annotations

import logging
import os
from typing import Iterable, Iterator, Optional

from .errors import ScanError
from .utils.gitignore import get_gitignore, is_ignored

log = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md",)


def iter_documents(
    root: str,
    *,
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    respect_gitignore: bool = True,
) -> Iterator[str]:
    """
    Yield absolute paths of markup documents under `root`, depth-first in
    sorted order so runs are deterministic.

    '.git' directories are always skipped. With `respect_gitignore`, entries
    matched by the nearest .gitignore are skipped too.

    Raises:
        ScanError: if `root` does not exist or is not a directory.
    """
    root = os.path.abspath(root)
    if not os.path.isdir(root):
        raise ScanError(f"Input directory '{root}' does not exist")

    exts = tuple(e.lower() for e in extensions)
    spec = get_gitignore(root) if respect_gitignore else None

    def _walk(current: str) -> Iterator[str]:
        try:
            entries = sorted(os.listdir(current))
        except OSError as e:
            log.warning("Cannot list directory '%s': %s", current, e)
            return
        for entry in entries:
            full_path = os.path.join(current, entry)
            if entry == ".git":
                continue
            if spec is not None and is_ignored(spec, full_path, root):
                log.debug("Skipping ignored path '%s'", full_path)
                continue
            if os.path.isdir(full_path):
                yield from _walk(full_path)
            elif entry.lower().endswith(exts):
                yield full_path

    yield from _walk(root)


def read_document(path: str) -> Optional[str]:
    """Read a document as UTF-8, returning None (and logging) when unreadable."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        log.error("Could not read document '%s': %s", path, e)
        return None
