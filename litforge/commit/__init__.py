from .core import Change, CommitSummary, commit_changes
from .writers import (
    apply_pull_from,
    inject,
    splice_imports,
    write_imports,
    write_injections,
    write_outputs,
    write_pull_from,
)

__all__ = [
    "Change",
    "CommitSummary",
    "commit_changes",
    "apply_pull_from",
    "inject",
    "splice_imports",
    "write_imports",
    "write_injections",
    "write_outputs",
    "write_pull_from",
]
