from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(frozen=True)
class Block:
    """Base block: one annotated region of a literate document."""

    kind: ClassVar[str] = ""

    source_file: str
    body: str
    start_line: int
    end_line: int


@dataclass(frozen=True)
class CodeBlock(Block):
    """A named, reusable fragment."""

    kind: ClassVar[str] = "code"

    name: str = ""


@dataclass(frozen=True)
class OutputBlock(Block):
    """Body becomes the full content of a new file at ``target_path``."""

    kind: ClassVar[str] = "output"

    target_path: str = ""
    relative_dir: str = ""


@dataclass(frozen=True)
class InjectionBlock(Block):
    """Body replaces ``{{{ name }}}`` inside an existing file."""

    kind: ClassVar[str] = "injection"

    name: str = ""
    target_path: str = ""


@dataclass(frozen=True)
class ConfigurationBlock(Block):
    """Line-oriented configuration data; ``name`` selects how it is read."""

    kind: ClassVar[str] = "config"

    name: str = ""


@dataclass(frozen=True)
class ImportBlock(Block):
    """Splices external content into the document at the block's own span."""

    kind: ClassVar[str] = "import"

    source_path_ref: Optional[str] = None
    line_start: Optional[int] = None
    line_end: Optional[int] = None
    tag: Optional[str] = None


@dataclass(frozen=True)
class ReferenceBlock(Block):
    """A named fragment whose content is read from an external file on use."""

    kind: ClassVar[str] = "reference"

    name: str = ""
    source_path_ref: Optional[str] = None
    line_start: Optional[int] = None
    line_end: Optional[int] = None
    tag: Optional[str] = None


@dataclass(frozen=True)
class CustomBlock(Block):
    """Region delimited by ``<!-- block: NAME -->`` / ``<!-- end_block -->``."""

    kind: ClassVar[str] = "custom"

    block_name: str = ""


@dataclass(frozen=True)
class PullFromBlock(Block):
    """A ``<!-- pull_from: PATH, block: NAME -->`` marker awaiting processing."""

    kind: ClassVar[str] = "pull_from"

    file_path: str = ""
    block_name: str = ""


BLOCK_KINDS = (
    CodeBlock,
    OutputBlock,
    InjectionBlock,
    ConfigurationBlock,
    ImportBlock,
    ReferenceBlock,
    CustomBlock,
    PullFromBlock,
)


def block_name(block: Block) -> Optional[str]:
    """Return the lookup name of a block, or None for unnamed kinds."""
    if isinstance(block, (CodeBlock, InjectionBlock, ConfigurationBlock, ReferenceBlock)):
        return block.name
    if isinstance(block, CustomBlock):
        return block.block_name
    return None
