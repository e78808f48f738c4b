# litforge/core.py
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .commit.core import CommitSummary
from .commit.writers import write_imports, write_injections, write_outputs, write_pull_from
from .config import apply_configuration, has_config_document
from .extract.lexer import lex_document
from .models.options import Options
from .plan import plan_outputs
from .scan import iter_documents, read_document
from .store import BlockStore

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """What one run wrote, per writer, plus every path that failed."""

    outputs: List[str] = field(default_factory=list)
    injected: List[str] = field(default_factory=list)
    imported: List[str] = field(default_factory=list)
    pulled: List[str] = field(default_factory=list)
    # Map path -> error string
    errors: Dict[str, str] = field(default_factory=dict)
    dry_run: bool = False

    @property
    def failed(self) -> List[str]:
        return list(self.errors)

    def record(self, target: List[str], commit: CommitSummary) -> None:
        target.extend(commit.success)
        self.errors.update(commit.errors)


def build_store(options: Options) -> BlockStore:
    """
    Scan the input tree and lex every literate document into one store.

    Raises:
        ScanError: if the input directory does not exist.
    """
    store = BlockStore()
    documents = 0
    for path in iter_documents(
        options.input_path,
        extensions=options.markup_extensions,
        respect_gitignore=options.respect_gitignore,
    ):
        text = read_document(path)
        if text is None:
            continue
        store.extend(lex_document(text, path).blocks)
        documents += 1
    logger.info("Scanned %d documents: %r", documents, store)
    return store


def run(
    options: Options,
    *,
    overrides: Optional[Mapping[str, Any]] = None,
    dry_run: bool = False,
) -> RunSummary:
    """
    One full batch pass: scan, lex, configure, filter, then write outputs,
    injections, imports and pull_from patches, in that order.

    `options` carries the defaults plus whatever is needed to find the
    documents (input path); configuration blocks refine it, and `overrides`
    (typically from the command line) win over both.

    Per-block failures are collected in the summary. Only a missing input
    directory (ScanError) and reference-graph errors (CyclicReferenceError,
    UnresolvedReferenceError under the 'error' policy) propagate.
    """
    store = build_store(options)
    has_config_document(options)
    options = apply_configuration(options, store)
    if overrides:
        options = options.with_overrides(**overrides)

    summary = RunSummary(dry_run=dry_run)
    outputs = plan_outputs(store, options)
    logger.info("Found %d code blocks.", len(store.blocks_of_kind("code")))
    summary.record(summary.outputs, write_outputs(outputs, store, options, dry_run=dry_run))
    summary.record(summary.injected, write_injections(store, options, dry_run=dry_run))
    summary.record(summary.imported, write_imports(store, options, dry_run=dry_run))
    summary.record(summary.pulled, write_pull_from(store, options, dry_run=dry_run))
    logger.info("Processing complete.")
    return summary
