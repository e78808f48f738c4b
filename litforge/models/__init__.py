from .blocks import (
    BLOCK_KINDS,
    Block,
    CodeBlock,
    ConfigurationBlock,
    CustomBlock,
    ImportBlock,
    InjectionBlock,
    OutputBlock,
    PullFromBlock,
    ReferenceBlock,
    block_name,
)
from .fence import FenceHeader
from .options import UNRESOLVED_POLICIES, Options

__all__ = [
    "BLOCK_KINDS",
    "Block",
    "CodeBlock",
    "ConfigurationBlock",
    "CustomBlock",
    "ImportBlock",
    "InjectionBlock",
    "OutputBlock",
    "PullFromBlock",
    "ReferenceBlock",
    "block_name",
    "FenceHeader",
    "Options",
    "UNRESOLVED_POLICIES",
]
