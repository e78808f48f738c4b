"""
litforge command line

Scans a tree of literate markdown documents and materializes the files their
lit- blocks describe.
"""

import argparse
import logging
import re
import sys

from .core import run
from .errors import CyclicReferenceError, ScanError, UnresolvedReferenceError
from .models.options import UNRESOLVED_POLICIES, Options


def _regex(value):
    """argparse type: keep the pattern text, but reject it if it does not compile."""
    try:
        re.compile(value)
    except re.error as e:
        raise argparse.ArgumentTypeError(f"invalid regular expression {value!r}: {e}")
    return value


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="litforge",
        description="Extract lit- blocks from markdown documents and write the files they describe.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  litforge                                  # Process the current directory
  litforge --input-path=docs                # Process a documentation tree
  litforge --input-path=docs --output-path=build
  litforge --output-file=src/main.js        # Only write one output target
  litforge --md-file='guide/.*\\.md'         # Only outputs from matching documents
        """,
    )

    parser.add_argument(
        "--input-path",
        default=".",
        help="Root directory of the literate documents (default: current directory)",
    )
    parser.add_argument(
        "--output-path",
        default=None,
        help="Directory prefix for every output file",
    )
    parser.add_argument(
        "--output-file",
        default=None,
        help="Only write the output block with this target path",
    )
    parser.add_argument(
        "--md-file",
        default=None,
        type=_regex,
        help="Only write output blocks from documents whose path matches this regex",
    )

    parser.add_argument(
        "--no-source-comments",
        dest="output_source",
        action="store_false",
        default=None,
        help="Do not emit '// Source:' / '// Anchor:' comments",
    )
    parser.add_argument(
        "--absolute-source-paths",
        dest="output_source_absolute_paths",
        action="store_true",
        default=None,
        help="Use absolute paths in '// Source:' comments",
    )
    parser.add_argument(
        "--unresolved",
        choices=UNRESOLVED_POLICIES,
        default=None,
        help="What to do with placeholders naming no block (default: warn)",
    )
    parser.add_argument(
        "--no-gitignore",
        dest="respect_gitignore",
        action="store_false",
        help="Scan paths matched by .gitignore too",
    )
    parser.add_argument(
        "--atomic",
        action="store_true",
        default=None,
        help="Write each file through a tempfile swapped in with os.replace()",
    )
    parser.add_argument(
        "--backup-ext",
        default=None,
        help="Keep a copy of every overwritten file with this extension (e.g. .bak)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report what would be written without touching any file",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    level = logging.DEBUG if parsed.verbose else logging.WARNING if parsed.quiet else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    options = Options(input_path=parsed.input_path, respect_gitignore=parsed.respect_gitignore)
    overrides = {
        "output_path": parsed.output_path,
        "output_file": parsed.output_file,
        "md_file": parsed.md_file,
        "output_source": parsed.output_source,
        "output_source_absolute_paths": parsed.output_source_absolute_paths,
        "unresolved": parsed.unresolved,
        "atomic": parsed.atomic,
        "backup_ext": parsed.backup_ext,
    }

    try:
        summary = run(options, overrides=overrides, dry_run=parsed.dry_run)
    except ScanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (CyclicReferenceError, UnresolvedReferenceError) as e:
        print(f"Error resolving placeholders: {e}", file=sys.stderr)
        return 1

    prefix = "DRY RUN: " if summary.dry_run else ""
    print(
        f"{prefix}{len(summary.outputs)} written, {len(summary.injected)} injected, "
        f"{len(summary.imported)} imported, {len(summary.pulled)} pulled, "
        f"{len(summary.errors)} failed",
        file=sys.stderr,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
