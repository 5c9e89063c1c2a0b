#!/usr/bin/env python
"""
COBOL Data Source Options CLI.

Command-line interface for checking data source options before a read.

Usage:
    python -m mf_cobol.cli resolve -o copybook=CUSTREC.cpy -o path=input/CUSTDATA.PS
    python -m mf_cobol.cli resolve --options-file options.json --pedantic
    python -m mf_cobol.cli keys

Example:
    python -m mf_cobol.cli resolve -o copybook=EXPORT.cpy -o path=export.dat \\
        -o is_record_sequence=true -o segment_field=SEGMENT-ID
"""

import argparse
import json
import logging
import sys

from mf_cobol.core.exceptions import CobolOptionError
from mf_cobol.core.source import CobolSource
from mf_cobol.parsers.parameters_parser import PARAM_PEDANTIC, RECOGNIZED_OPTIONS

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


def load_options(args) -> dict[str, str]:
    """
    Collect options from the options file and -o arguments.

    Command line options override the file. Non-string JSON values are
    converted the way Spark converts option values.

    Raises:
        ValueError: If the options file is not a JSON object, or an -o
            argument is not of the form key=value
    """
    options = {}
    if args.options_file:
        with open(args.options_file, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("Options file must contain a JSON object")
        for key, value in data.items():
            if isinstance(value, bool):
                value = "true" if value else "false"
            options[key] = str(value)

    for item in args.option or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"Option must be of the form key=value: {item}")
        options[key.strip()] = value

    if args.pedantic:
        options[PARAM_PEDANTIC] = "true"
    return options


def cmd_resolve(args):
    """Resolve options and print the reader plan."""
    try:
        options = load_options(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    logger.debug("Resolving %d option(s)", len(options))
    try:
        plan = CobolSource().create_reader(options)
    except CobolOptionError as e:
        print(f"Error: {e}")
        return 1

    print(json.dumps(plan.to_dict(), indent=2))
    return 0


def cmd_keys(args):
    """List recognized option keys."""
    print("=" * 50)
    print("RECOGNIZED OPTIONS")
    print("=" * 50)
    for key in RECOGNIZED_OPTIONS:
        print(f"  {key}")
    print("-" * 50)
    print(f"Total: {len(RECOGNIZED_OPTIONS)} options")
    return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="COBOL data source options CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve options and select a reader")
    resolve_parser.add_argument(
        "--option", "-o",
        action="append",
        help="Option as key=value (repeatable)",
    )
    resolve_parser.add_argument("--options-file", "-f", help="Options file (JSON object)")
    resolve_parser.add_argument(
        "--pedantic",
        action="store_true",
        help="Fail on unrecognized options",
    )
    resolve_parser.set_defaults(func=cmd_resolve)

    # Keys command
    keys_parser = subparsers.add_parser("keys", help="List recognized option keys")
    keys_parser.set_defaults(func=cmd_keys)

    args = parser.parse_args(argv)
    _setup_logging(verbose=args.verbose)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
