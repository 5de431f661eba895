"""Main CLI entry point for wallace."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from .. import __version__
from ..config import UNKNOWN_TYPE_POLICIES, DecoderConfig
from ..exceptions import WallaceError
from ..framing import extract_messages
from ..io import open_log
from ..models import load_registry
from ..utils import export_groups, group_by_name, write_warnings_log


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wallace",
        description="wallace: Binary Log Decoder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wallace -i flight.dat                       Decode with ./messages.json into ./output
  wallace -i flight.dat.bz2 -r defs.json -o csv
  wallace -i flight.dat --unknown-types warn  Log message types missing from the registry
        """,
    )

    parser.add_argument(
        "-i",
        "--input",
        metavar="FILE",
        required=True,
        help="Input log file (e.g. example.dat, log.bz2, log.gz)",
    )
    parser.add_argument(
        "-r",
        "--registry",
        metavar="JSON_FILE",
        default="messages.json",
        help="Message definition JSON file (default: messages.json)",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="DIRECTORY",
        default="output",
        help="Output directory for CSV files (default: output)",
    )
    parser.add_argument(
        "--unknown-types",
        choices=UNKNOWN_TYPE_POLICIES,
        default="drop",
        help="Drop unknown message types silently, or drop them with a warning",
    )
    parser.add_argument(
        "--max-payload-length",
        metavar="BYTES",
        type=int,
        default=None,
        help="Abort if a message declares a longer payload",
    )
    parser.add_argument(
        "--best-effort-skip",
        action="store_true",
        help="Keep decoding past padding fields whose size cannot be determined",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"wallace {__version__}",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the wallace CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = DecoderConfig(
            unknown_types=args.unknown_types,
            max_payload_length=args.max_payload_length,
            best_effort_skip=args.best_effort_skip,
        )
    except ValueError as e:
        parser.error(str(e))

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: File not found: {input_path}", file=sys.stderr)
        return 1

    try:
        registry = load_registry(args.registry)
        with open_log(input_path) as stream:
            result = extract_messages(stream, registry, config)

        output_dir = Path(args.output)
        groups = group_by_name(result.messages)
        for name, file_path in export_groups(output_dir, groups).items():
            print(f"Wrote {len(groups[name])} rows to '{file_path}'")

        warnings = result.warnings
        if warnings:
            warnings_path = output_dir / "warnings.log"
            write_warnings_log(warnings_path, warnings)
            print(f"Wrote {len(warnings)} warnings to '{warnings_path}'")
    except (WallaceError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result.skip_count > 0:
        print(f"Skipped {result.skip_count} ignorable fields like TRASH, PADDING, RESERVED")

    return 0


if __name__ == "__main__":
    sys.exit(main())
