"""Main CLI dispatcher for edgecov.

Parses the command line and dispatches to the `assign` and `compare`
sub-commands.
"""

import sys
import argparse

from edgecov import __version__
from .assign import add_assign_parser, add_compare_parser, run_assign, run_compare


def main(argv=None):
    """Main entry point for the edgecov CLI.

    Returns:
        int: Exit code (0 for success, non-zero for error).
    """
    parser = argparse.ArgumentParser(
        description="edgecov - collision-free edge ids for coverage maps", prog="edgecov"
    )

    parser.add_argument("--version", action="version", version="edgecov %s" % __version__)

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )

    add_assign_parser(subparsers)
    add_compare_parser(subparsers)

    args = parser.parse_args(argv)

    if not args.input.exists():
        print(f"Error: Path '{args.input}' not found", file=sys.stderr)
        return 1

    if args.command == "assign":
        return run_assign(args.input, args)
    elif args.command == "compare":
        return run_compare(args.input, args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
