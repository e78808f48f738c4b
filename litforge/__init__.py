from .commit import (
    Change,
    CommitSummary,
    apply_pull_from,
    commit_changes,
    inject,
    splice_imports,
    write_imports,
    write_injections,
    write_outputs,
    write_pull_from,
)
from .config import apply_configuration
from .core import RunSummary, build_store, run
from .errors import (
    CyclicReferenceError,
    ExtractError,
    InjectionError,
    LitforgeError,
    ScanError,
    TagNotFoundError,
    UnresolvedReferenceError,
)
from .extract import extract_content, lex_document, parse_fence_header
from .models import (
    Block,
    CodeBlock,
    ConfigurationBlock,
    CustomBlock,
    ImportBlock,
    InjectionBlock,
    Options,
    OutputBlock,
    PullFromBlock,
    ReferenceBlock,
)
from .plan import filter_output_blocks, plan_outputs
from .resolve import render_block, resolve_placeholders
from .scan import iter_documents
from .store import BlockStore

__version__ = "0.4.0"

__all__ = [
    "run",
    "build_store",
    "RunSummary",
    "iter_documents",
    "lex_document",
    "parse_fence_header",
    "extract_content",
    "BlockStore",
    "apply_configuration",
    "filter_output_blocks",
    "plan_outputs",
    "resolve_placeholders",
    "render_block",
    "Change",
    "CommitSummary",
    "commit_changes",
    "write_outputs",
    "write_injections",
    "write_imports",
    "write_pull_from",
    "inject",
    "splice_imports",
    "apply_pull_from",
    "Options",
    "Block",
    "CodeBlock",
    "OutputBlock",
    "InjectionBlock",
    "ConfigurationBlock",
    "ImportBlock",
    "ReferenceBlock",
    "CustomBlock",
    "PullFromBlock",
    "LitforgeError",
    "ScanError",
    "ExtractError",
    "TagNotFoundError",
    "InjectionError",
    "CyclicReferenceError",
    "UnresolvedReferenceError",
]
