"""Command-line argument parsing for ctxbundle."""

import argparse
from pathlib import Path

from ctxbundle import __version__
from ctxbundle.config import DEFAULT_RULES_FILE
from ctxbundle.output_strategies import OUTPUT_STRATEGIES
from ctxbundle.file_system_tree.permission_action import PermissionAction

# Command-line names for the permission actions
PERMISSION_CHOICES = {
    "ignore": PermissionAction.IGNORE,
    "warn": PermissionAction.WARN,
    "fail": PermissionAction.RAISE,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ctxbundle command."""
    description = """
    ctxbundle: assemble a project's tree and selected files into one document for an LLM.

    The document starts with a tree display of the project root, filtered by the
    project's ignore rules, followed by one fenced block per selected file. Selected
    directories are expanded to the files beneath them, filtered by the same rules;
    files selected directly are always included.

    Key Features:
    - Tree display with "+-- " and "\\-- " branch markers
    - Ignore rules from the project's rules file plus supplemental patterns
    - Selection from the command line or the clipboard
    - Optional working-tree diff and remote specification sections
    - Markdown (default) or XML output, to stdout, a file or the clipboard
    - Optional token counting for LLM context management
    """

    epilog = """
    Examples:
      # Tree of the current directory plus every file beneath it
      ctxbundle

      # Tree plus two selected entries of another project
      ctxbundle -r /path/to/project src/main.py docs

      # Read the selection from the clipboard and copy the result back
      ctxbundle --from-clipboard -c

      # Add the working-tree diff and a remote specification
      ctxbundle -d -u https://example.com/spec.md src

      # Extra ignore patterns, XML output to a file, summary on stderr
      ctxbundle -i "*.lock" -i "/dist" -f xml -o bundle.xml -s stderr

      # Token counting (requires the token_counting extra)
      ctxbundle -t gpt-4 -s stderr
    """

    parser = argparse.ArgumentParser(
        prog="ctxbundle",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"ctxbundle {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help=(
            "Files and directories to include, relative to the root unless absolute; file:// URIs are "
            "accepted. Defaults to the whole root unless --from-clipboard is given."
        ),
    )
    parser.add_argument(
        "-r",
        "--root",
        type=Path,
        default=Path("."),
        help="Project root. The tree, ignore rules and file headers are relative to it (default: .).",
    )
    parser.add_argument(
        "--rules-file",
        metavar="NAME",
        default=DEFAULT_RULES_FILE,
        help=f"Ignore rules file, relative to the root (default: {DEFAULT_RULES_FILE}). A missing file is ignored.",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERN",
        action="append",
        default=[],
        help=(
            "Additional ignore pattern (can be specified multiple times). A leading '/' anchors it to the "
            "root, '*' matches any run of characters and '?' one character."
        ),
    )
    parser.add_argument(
        "-T",
        "--no-tree",
        action="store_true",
        help="Disable the tree display.",
    )
    parser.add_argument(
        "-d",
        "--diff",
        action="store_true",
        help="Append the working-tree diff (git diff) of the root.",
    )
    parser.add_argument(
        "-u",
        "--spec-url",
        metavar="URL",
        help="Append the document fetched from URL as a specification section.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=sorted(OUTPUT_STRATEGIES),
        default="markdown",
        help="Output format (default: markdown).",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Descend into symbolically linked directories. Loops are detected and skipped.",
    )
    parser.add_argument(
        "-P",
        "--permission-action",
        choices=list(PERMISSION_CHOICES),
        default="warn",
        help="How to handle entries that cannot be listed or read (default: warn).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-c",
        "--clipboard",
        action="store_true",
        help="Also copy the document to the clipboard.",
    )
    parser.add_argument(
        "--from-clipboard",
        action="store_true",
        help="Read the selected paths from the clipboard, one per line, when no PATH is given.",
    )
    parser.add_argument(
        "-t",
        "--tokenizer",
        metavar="MODEL",
        help="Tokenizer model to use for counting tokens (e.g., gpt-4). Specifying this enables token counting.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print summary report. Valid destinations: stderr, stdout, file (requires -o)",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Check constraints between arguments that argparse cannot express.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")

    if not args.root.is_dir():
        raise ValueError(f"'{args.root}' is not a valid directory")
