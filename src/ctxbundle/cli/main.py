"""Command-line interface for ctxbundle.

Assembles the bundle for a project root and writes it block by block to stdout
or a file, optionally copying the finished document to the clipboard.

Signal Handling Notes:
    SIGPIPE (the reader closed the pipe, e.g. `ctxbundle | head`) and SIGINT
    (Ctrl+C) stop the output at the next block; the exit code reports which.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Tree of a project plus its src directory
    $ ctxbundle -r /path/to/project src

    # Selection from the clipboard, result back to the clipboard
    $ ctxbundle --from-clipboard -c -o /dev/null
"""

import argparse
import sys
from collections.abc import Mapping
from typing import List, Optional, Sequence

from humanfriendly import format_size

from ctxbundle.bundle import ContextBundle
from ctxbundle.cli.argparser import PERMISSION_CHOICES, create_parser, validate_args
from ctxbundle.cli.safe_writer import SafeWriter
from ctxbundle.cli.signal_handler import setup_signal_handling, signal_handler
from ctxbundle.config import DEFAULT_SUPPLEMENTAL_PATTERNS, BundleConfig
from ctxbundle.exclusion_rules import BaseExclusionRules, ExcludedPathsRules
from ctxbundle.providers import SystemProvider, write_clipboard


def format_counts(counts: Mapping[str, Optional[int]]) -> str:
    """Format the counts into a human-readable string.

    Example:
        >>> print(format_counts({"files": 2, "lines": 10, "tokens": None, "characters": 120, "bytes": 120}))
        Files: 2
        Lines: 10
        Characters: 120
        Size: 120 bytes
    """
    result = [
        f"Files: {counts['files']}",
        f"Lines: {counts['lines']}",
        f"Characters: {counts['characters']}",
        f"Size: {format_size(counts['bytes'] or 0)}",
    ]

    if counts["tokens"] is not None:
        result.insert(2, f"Tokens: {counts['tokens']}")

    return "\n".join(result)


def build_config(args: argparse.Namespace) -> BundleConfig:
    """Translate parsed arguments into a bundle configuration."""
    return BundleConfig(
        root=args.root,
        rules_file=args.rules_file,
        supplemental_patterns=DEFAULT_SUPPLEMENTAL_PATTERNS + tuple(args.ignore),
        include_tree=not args.no_tree,
        include_diff=args.diff,
        spec_url=args.spec_url,
        output_format=args.format,
        permission_action=PERMISSION_CHOICES[args.permission_action],
        follow_symlinks=args.follow_symlinks,
        tokenizer_model=args.tokenizer,
    )


def build_provider(args: argparse.Namespace) -> SystemProvider:
    """Create the provider for the selection given on the command line.

    Without explicit paths the whole root is selected, unless the selection is
    to be read from the clipboard.
    """
    selected: Optional[List[str]] = list(args.paths)
    if not selected and not args.from_clipboard:
        selected = ["."]
    return SystemProvider(args.root, selected=selected, from_clipboard=args.from_clipboard)


def build_exclusion_rules(args: argparse.Namespace, config: BundleConfig) -> BaseExclusionRules:
    """Load the project's rules, keeping the output file itself out of the bundle.

    The output file exists before the root is walked, so when it lies inside the
    root it would otherwise be listed and read back while half written.
    """
    rules = config.load_exclusion_rules()
    if args.output:
        return ExcludedPathsRules(config.root, rules, [args.output])
    return rules


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the ctxbundle command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    # argparse exits with 2 on syntax errors and 0 for --version
    args = create_parser().parse_args(argv)

    try:
        validate_args(args)
        config = build_config(args)
        bundle = ContextBundle(config, build_provider(args), exclusion_rules=build_exclusion_rules(args, config))

        output_file = args.output if args.output else sys.stdout.fileno()

        try:
            with SafeWriter(output_file) as safe_writer:
                try:
                    for block in bundle.stream():
                        safe_writer.write(block)

                    if args.summary in ("stdout", "file"):
                        safe_writer.write("\n" + format_counts(_counts(bundle)) + "\n")

                except BrokenPipeError:
                    pass  # SafeWriter closes in the context manager
        finally:
            for warning in bundle.warnings:
                print(f"Warning: {warning}", file=sys.stderr)

        if args.summary == "stderr":
            print(format_counts(_counts(bundle)), file=sys.stderr)

        if args.clipboard and not signal_handler.interrupted:
            write_clipboard(bundle.text)

    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    if signal_handler.sigpipe_received.is_set():
        sys.exit(141)
    elif signal_handler.sigint_received.is_set():
        sys.exit(130)


def _counts(bundle: ContextBundle) -> Mapping[str, Optional[int]]:
    return {
        "files": bundle.file_count,
        "lines": bundle.line_count,
        "tokens": bundle.token_count,
        "characters": bundle.character_count,
        "bytes": bundle.byte_count,
    }


if __name__ == "__main__":
    main()
