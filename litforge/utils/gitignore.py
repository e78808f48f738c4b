# litforge/utils/gitignore.py
import os
from typing import List

import pathspec


def get_gitignore(path: str) -> pathspec.PathSpec:
    """
    Return a PathSpec compiled from the nearest .gitignore found by walking
    upward from `path` (file or directory). Always ignores '.git/'.
    """
    lines: List[str] = [".git/"]

    base = os.path.abspath(path or ".")
    if os.path.isfile(base):
        base = os.path.dirname(base)

    cur = base
    while True:
        gi = os.path.join(cur, ".gitignore")
        if os.path.isfile(gi):
            try:
                with open(gi, "r", encoding="utf-8", errors="ignore") as f:
                    lines.extend(f.read().splitlines())
                break
            except OSError:
                # Unreadable: keep walking upward
                pass
        parent = os.path.dirname(cur)
        if parent == cur:
            break
        cur = parent

    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


def is_ignored(spec: pathspec.PathSpec, full_path: str, root: str) -> bool:
    """Match `full_path` against `spec` using a POSIX path relative to `root`."""
    relative_path = os.path.relpath(full_path, root).replace(os.sep, "/")
    # Trailing '/' for directories so patterns like 'build/' match
    probe = relative_path + ("/" if os.path.isdir(full_path) else "")
    return spec.match_file(probe)
