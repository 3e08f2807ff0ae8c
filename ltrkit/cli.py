#!/usr/bin/env python3
"""
ltrkit CLI
==========
Command-line interface for .ltr name tables.

Usage:
    ltrkit build names.ltr < names.txt
    ltrkit generate names.ltr -n 20 --seed 42
    ltrkit print names.ltr --order 1 --pretty
    ltrkit repair original.ltr -o fixed.ltr
"""

import argparse
import io
import logging
import sys
from pathlib import Path

from . import __version__
from .config import GenerateConfig, TrainConfig
from .errors import LtrError
from .generator import LtrGenerator
from .ltrfile import load, save
from .presenter import format_rows, iter_rows, render_table
from .repair import detect_corruption, repair
from .settings import get_setting
from .trainer import LtrTrainer

logger = logging.getLogger(__name__)


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

    def result(self, *args, **kwargs):
        """Primary output; printed even in quiet mode."""
        print(*args, **kwargs)

    def error(self, msg: str):
        print(f"Error: {msg}", file=sys.stderr)

    def success(self, msg: str):
        if not self.quiet:
            print(f"OK: {msg}", file=sys.stderr)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging on stderr from app.yaml and flags."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = getattr(logging, str(get_setting("logging.level", "WARNING")).upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format=get_setting("logging.format", "%(levelname)s: %(message)s"),
        stream=sys.stderr,
        force=True,
    )


def load_table(path: str, fix: bool):
    """Load a table and repair it unless fixing is disabled."""
    table = load(path)
    if fix:
        repair(table)
    return table


# =============================================================================
# Commands
# =============================================================================

def cmd_build(args, out: Output):
    """Train a table from a word list and save it."""
    trainer = LtrTrainer(TrainConfig())

    # undecodable bytes become U+FFFD and are dropped as invalid characters
    if args.input:
        with open(args.input, encoding='utf-8', errors='replace') as f:
            table = trainer.train(f)
    else:
        stdin = io.TextIOWrapper(sys.stdin.buffer, encoding='utf-8', errors='replace')
        table = trainer.train(stdin)

    report = trainer.report
    if not report.accepted:
        out.error("No usable names in input")
        return 1

    path = save(args.file, table)
    out.success(
        f"Built {path} from {report.accepted} names "
        f"({report.too_short} skipped, {report.dropped_chars} characters dropped)"
    )
    return 0


def cmd_generate(args, out: Output):
    """Generate names from a table."""
    config = GenerateConfig(
        count=args.count,
        seed=args.seed,
        fix=False if args.nofix else None,
    )
    table = load_table(args.file, config.fix)

    generator = LtrGenerator(table, config=config)
    for name in generator.generate_batch(config.count, unique=args.unique):
        out.result(name)
    return 0


def cmd_print(args, out: Output):
    """Print the CDF tables of a file."""
    table = load_table(args.file, not args.nofix)
    rows = iter_rows(table, order=args.order, nonzero=args.nonzero)

    if args.pretty:
        render_table(rows, title=Path(args.file).name)
    else:
        for line in format_rows(rows):
            out.result(line)
    return 0


def cmd_repair(args, out: Output):
    """Fix the historical singles corruption and write the result."""
    table = load(args.file)

    if args.dry_run:
        corrupt = detect_corruption(table)
        for slot, is_bad in corrupt.items():
            out.result(f"singles.{slot.name.lower()}: {'corrupt' if is_bad else 'ok'}")
        return 0

    report = repair(table)
    if not report.any_corrupt:
        out.success(f"{args.file} has no corruption")
        if not args.output:
            return 0

    # A residual row still reads as corrupt, so loading it later would
    # apply the gap corrections a second time.
    if report.residual and not args.force:
        out.error(
            "Repair did not converge to 1.0; refusing to write. "
            "Use --force to write anyway, then read the result with --nofix."
        )
        return 1

    target = save(args.output or args.file, table)
    if report.residual:
        out.print(
            f"Repaired with residual error. Read {target} with --nofix.",
            file=sys.stderr,
        )
    out.success(f"Wrote {target}")
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ltrkit',
        description='ltrkit - build, repair and sample .ltr name tables',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s build names.ltr < names.txt
  %(prog)s generate names.ltr -n 20 --seed 42
  %(prog)s print names.ltr --order 2 --nonzero
  %(prog)s repair original.ltr -o fixed.ltr
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- build ---
    p = subparsers.add_parser('build', aliases=['b'], help='Build a table from words on stdin')
    p.add_argument('file', help='.ltr file to write')
    p.add_argument('--input', '-i', help='Read words from this file instead of stdin')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('file', help='.ltr file to read')
    p.add_argument('-n', '--count', type=int, help='Number of names (default: from app.yaml)')
    p.add_argument('-s', '--seed', type=int, help='RNG seed (default: random)')
    p.add_argument('--unique', '-u', action='store_true', help='Skip duplicate names')
    p.add_argument('--nofix', action='store_true',
                   help='Do not fix corrupted tables (use for files written by repair --force)')

    # --- print ---
    p = subparsers.add_parser('print', aliases=['p'], help='Print tables in human readable form')
    p.add_argument('file', help='.ltr file to read')
    p.add_argument('--order', '-o', type=int, choices=[1, 2, 3], help='Only sequences of this length')
    p.add_argument('--nonzero', '-z', action='store_true', help='Skip all-zero rows')
    p.add_argument('--pretty', action='store_true', help='Rich table output')
    p.add_argument('--nofix', action='store_true',
                   help='Do not fix corrupted tables (use for files written by repair --force)')

    # --- repair ---
    p = subparsers.add_parser('repair', aliases=['fix'], help='Fix corrupted singles tables')
    p.add_argument('file', help='.ltr file to read')
    p.add_argument('--output', '-o', help='Write here instead of overwriting the input')
    p.add_argument('--dry-run', '-d', action='store_true', help='Only report corruption')
    p.add_argument('--force', '-f', action='store_true',
                   help='Write even if the repair leaves residual error')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    # Handle aliases
    cmd_map = {
        'b': 'build',
        'gen': 'generate', 'g': 'generate',
        'p': 'print',
        'fix': 'repair',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'build': cmd_build,
        'generate': cmd_generate,
        'print': cmd_print,
        'repair': cmd_repair,
    }

    handler = commands[command]
    try:
        setup_logging(verbose=args.verbose, quiet=args.quiet)
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.", file=sys.stderr)
        return 130
    except (LtrError, OSError, ValueError) as e:
        out.error(str(e))
        if args.verbose:
            logger.exception("Command failed")
        return 1


if __name__ == '__main__':
    sys.exit(main())
