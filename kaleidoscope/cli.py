"""
Command-line entry point: ``kaleidoscope [file]``.
"""

import argparse
import logging
import sys

from . import __version__
from .driver import Driver, DEFAULT_PROMPT
from .parser.parser import DEFAULT_MAX_DEPTH


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kaleidoscope",
        description="Parse Kaleidoscope source and report each top-level construct",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    kaleidoscope                      # Interactive session on stdin
    kaleidoscope prog.kal --dump-ast  # Parse a file and print each tree
    echo 'def f(x) x*2' | kaleidoscope --no-prompt
        """
    )

    parser.add_argument('file', nargs='?',
                        help='Source file to parse (default: standard input)')
    parser.add_argument('--dump-ast', action='store_true',
                        help='Print each parsed tree in prefix form')
    parser.add_argument('--no-prompt', action='store_true',
                        help="Do not print the 'ready>' prompt")
    parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH,
                        help=f'Maximum expression nesting depth (default: {DEFAULT_MAX_DEPTH})')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log output (-v info, -vv debug)')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def configure_logging(verbosity: int):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    """Main entry point for the kaleidoscope command."""
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.verbose)

    options = dict(
        prompt=None if args.no_prompt else DEFAULT_PROMPT,
        dump=args.dump_ast,
        max_depth=args.max_depth,
    )

    if args.file:
        try:
            source = open(args.file, 'r', encoding='utf-8')
        except OSError as e:
            print(f"kaleidoscope: cannot read {args.file}: {e.strerror}", file=sys.stderr)
            return 2

    try:
        if args.file:
            with source:
                return Driver(source, filename=args.file, **options).run()
        return Driver(sys.stdin, **options).run()
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
