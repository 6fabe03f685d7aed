#!/usr/bin/env python3
"""
randstring CLI
==============
Command-line front end for the random string strategies.

Usage:
    randstring                     one std-random string of length 32
    randstring -l 32 -n 8 -o outstring.txt
    randstring -l 16 -n 4 --seed 1234 -s
"""

import argparse
import logging
import sys

from randstring import __version__
from randstring.config import RunConfig, atoi
from randstring.errors import RandStringError
from randstring.report import coverage, print_report
from randstring.settings import get_setting
from randstring.strategies import DEFAULT_STRATEGY, STRATEGY_ORDER, generate, generate_batch

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet

    def print(self, *args, **kwargs):
        if not self.quiet:
            print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='randstring',
        description='Random string generator comparing entropy sources',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Strategies (run in this order):
  """ + ', '.join(STRATEGY_ORDER) + """

Example:
  %(prog)s -l 32 -n 8 -o outstring.txt
"""
    )

    # Value flags take an optional argument so a trailing flag is ignored
    parser.add_argument('-l', dest='length', type=atoi, nargs='?', const=None,
                        help='String length (max 256)')
    parser.add_argument('-n', dest='count', type=atoi, nargs='?', const=None,
                        help='Number of strings per strategy')
    parser.add_argument('-o', dest='output', nargs='?', const=None,
                        help='Output filename (default: outstring.txt)')
    parser.add_argument('--seed', type=atoi,
                        help='Fixed seed for the seeded strategies')
    parser.add_argument('-s', '--stats', action='store_true',
                        help='Print a symbol coverage table per strategy')
    parser.add_argument('-q', '--quiet', action='store_true',
                        help='Only write the output file')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Debug logging on stderr')
    parser.add_argument('-V', '--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('-h', dest='help', action='store_true', help='Show usage')
    return parser


# =============================================================================
# Commands
# =============================================================================

def cmd_default(out: Output):
    """Print a single string with the default strategy."""
    length = get_setting("generation.default_length", 32)
    out.print(generate(DEFAULT_STRATEGY, length))
    return 0


def cmd_run(config: RunConfig, out: Output):
    """Run every strategy and write the results to stdout and the output file."""
    out.print(f"length : {config.length}")
    out.print(f"number of : {config.count}")
    out.print(f"output filename : {config.output}")

    results = {}
    with open(config.output, 'w', encoding='utf-8') as fh:
        for name in STRATEGY_ORDER:
            header = f"\n{name}\n"
            out.print(header)
            fh.write(header + "\n")

            strings = generate_batch(name, config.length, config.count, seed=config.seed)
            for s in strings:
                out.print(s)
                fh.write(s + "\n")
            results[name] = strings

    if config.stats:
        print_report([coverage(name, strings) for name, strings in results.items()])

    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        return cmd_default(Output())

    parser = build_parser()
    # Unknown arguments are ignored
    args, _ = parser.parse_known_args(argv)

    if args.help:
        print(parser.format_help())
        return 1

    config = RunConfig.from_args(args)
    out = Output(quiet=config.quiet)

    if config.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format='%(levelname)s %(name)s: %(message)s',
        )

    try:
        return cmd_run(config, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except (RandStringError, OSError) as e:
        out.error(str(e))
        if config.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == '__main__':
    sys.exit(main())
