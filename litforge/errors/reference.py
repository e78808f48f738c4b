from __future__ import annotations

from typing import Sequence

from .base import LitforgeError


class CyclicReferenceError(LitforgeError):
    """Placeholder expansion re-entered a block that is already being expanded."""

    def __init__(self, cycle: Sequence[str]):
        self.cycle = tuple(cycle)
        super().__init__("Cyclic reference: " + " -> ".join(self.cycle))


class UnresolvedReferenceError(LitforgeError):
    """A placeholder names no known block and the policy is 'error'."""

    def __init__(self, name: str, line_number: int | None = None):
        self.name = name
        self.line_number = line_number
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(f"Unresolved placeholder '{{{{{{ {name} }}}}}}'{where}")
