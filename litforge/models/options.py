from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional, Tuple

UNRESOLVED_POLICIES = ("keep", "warn", "error")


@dataclass(frozen=True)
class Options:
    """
    Run-wide settings, built once and threaded through every phase.

    Precedence is defaults, then configuration documents
    (see ``litforge.config.apply_configuration``), then CLI overrides
    (``with_overrides``).
    """

    input_path: str = "."
    output_path: Optional[str] = None
    # Narrow the run to a single output target / source documents matching a regex.
    output_file: Optional[str] = None
    md_file: Optional[str] = None
    include_files: Tuple[str, ...] = ()
    ignore_files: Tuple[str, ...] = ()
    output_source: bool = True
    output_source_absolute_paths: bool = False
    # What to do with a placeholder that names no known block.
    unresolved: str = "warn"
    markup_extensions: Tuple[str, ...] = (".md",)
    respect_gitignore: bool = True
    # Write through a tempfile + os.replace(); keep '<file><backup_ext>' copies of overwritten files.
    atomic: bool = False
    backup_ext: Optional[str] = None

    def __post_init__(self) -> None:
        if self.unresolved not in UNRESOLVED_POLICIES:
            raise ValueError(
                f"unresolved must be one of {UNRESOLVED_POLICIES}, got {self.unresolved!r}"
            )

    def with_overrides(self, **overrides: Any) -> "Options":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes) if changes else self
