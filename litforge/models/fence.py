from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class FenceHeader:
    """Attributes parsed from the opening line of a literate fence."""
    type: Optional[str] = None   # lit-type:  code | output | injection | config | import | reference
    name: Optional[str] = None   # lit-name:  lookup name
    file: Optional[str] = None   # lit-file:  target path, may contain ':'
    extra: Dict[str, str] = field(default_factory=dict)  # any other lit-<key>:<value>
