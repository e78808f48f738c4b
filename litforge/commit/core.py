# litforge/commit/core.py
import contextlib
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Dict, List, Optional

log = logging.getLogger(__name__)

ACTIONS = ("create", "modify")


@dataclass
class Change:
    """A single file write slated for commit."""
    action: str  # "create" (new or overwritten output) or "modify" (patch in place)
    path: str
    new_content: str = ""
    original_content: Optional[str] = None


@dataclass
class CommitSummary:
    """Outcome of a commit operation."""

    success: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    dry_run: bool = False
    # Map path -> error string (when failed)
    errors: Dict[str, str] = field(default_factory=dict)

    def merge(self, other: "CommitSummary") -> None:
        self.success.extend(other.success)
        self.failed.extend(other.failed)
        self.errors.update(other.errors)


def _backup_path(dest: str, backup_ext: str) -> str:
    ext = backup_ext if backup_ext.startswith(".") else "." + backup_ext
    return dest + ext


def _write_atomic(dest: str, content: str) -> None:
    """Stage to a same-directory tempfile, then promote with os.replace()."""
    fd, tmp = tempfile.mkstemp(prefix=".lit-", suffix=".tmp", dir=os.path.dirname(dest))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, dest)
    except BaseException:
        with contextlib.suppress(OSError):
            os.remove(tmp)
        raise


def commit_changes(
    base_path: str,
    changes: List[Change],
    *,
    atomic: bool = False,
    dry_run: bool = False,
    backup_ext: Optional[str] = None,
) -> CommitSummary:
    """
    Write a batch of files.

    Args:
        base_path: Directory relative paths are resolved against. Absolute
                   paths are written where they point.
        changes: Change instances to write, in order.
        atomic: If True, each file is staged to a tempfile and swapped in with
                os.replace(), so readers never see a half-written file.
        dry_run: If True, validate and report only; nothing is written.
        backup_ext: Optional extension (".bak" or "bak") for a copy of each
                    existing file that gets overwritten.

    Returns:
        CommitSummary listing written and failed paths.
    """
    summary = CommitSummary(dry_run=dry_run)
    base_real = os.path.abspath(base_path)

    for ch in changes:
        dest = ch.path if os.path.isabs(ch.path) else os.path.join(base_real, ch.path)
        dest = os.path.normpath(dest)
        try:
            if ch.action not in ACTIONS:
                raise ValueError(f"Unsupported action '{ch.action}'")
            if ch.action == "modify" and not os.path.isfile(dest):
                raise FileNotFoundError(f"File expected for modification not found: '{dest}'")

            dirpath = os.path.dirname(dest)
            if dry_run:
                if os.path.exists(dirpath) and not os.access(dirpath, os.W_OK):
                    raise PermissionError(f"No write permission for directory '{dirpath}'")
                summary.success.append(f"DRY RUN: Would {ch.action} file {ch.path} ({len(ch.new_content)} bytes)")
                continue

            os.makedirs(dirpath, exist_ok=True)
            if backup_ext and os.path.isfile(dest):
                shutil.copy2(dest, _backup_path(dest, backup_ext))
            if atomic:
                _write_atomic(dest, ch.new_content)
            else:
                with open(dest, "w", encoding="utf-8") as f:
                    f.write(ch.new_content)
            summary.success.append(ch.path)
            log.debug("Wrote %s (%d bytes)", dest, len(ch.new_content))
        except (OSError, ValueError) as e:
            summary.failed.append(ch.path)
            summary.errors[ch.path] = str(e)
            log.error("  - ERROR: could not %s '%s': %s", ch.action, ch.path, e)

    return summary
