#!/usr/bin/env python3
"""
namekit CLI
===========
Command-line interface for fictional name generation.

Usage:
    namekit generate elvish person_names -n 10 --seed moonlight
    namekit languages
    namekit categories dwarvish
    namekit validate path/to/language.yaml
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich import box

from namekit import __version__
from namekit.errors import NameKitError
from namekit.generators import generate
from namekit.languages import list_languages, load_language, load_language_file
from namekit.settings import get_setting


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def data(self, text: str):
        """Print machine-readable output; never suppressed."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", markup=False)

    def warning(self, msg: str):
        if not self.quiet:
            self.err_console.print(f"Warning: {msg}", markup=False)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return
        table = Table(title=title, box=box.SIMPLE_HEAD)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(Text(str(c)) for c in row))
        self.console.print(table)


def setup_logging(verbose: bool = False):
    level_name = 'DEBUG' if verbose else str(get_setting('logging.level', 'WARNING'))
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format=get_setting('logging.format', '%(levelname)s %(name)s: %(message)s'),
    )


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate names for a language category."""
    language = load_language(args.language)
    result = generate(language, args.category, seed=args.seed, count=args.count)
    if not result.ok:
        out.error(str(result.error))
        return 1

    if args.json:
        out.data(json.dumps({
            'seed': result.seed,
            'names': [n.to_dict() for n in result.names],
        }, ensure_ascii=False, indent=2))
        return 0

    if args.verbose:
        rows = []
        for i, name in enumerate(result.names, 1):
            flag = 'yes' if name.constraint_violation else ''
            rows.append([i, name.name, name.pattern, ' + '.join(name.fragments), flag])
        out.table(['#', 'Name', 'Pattern', 'Fragments', 'Violation'], rows,
                  title=f"{language.name} {args.category}")
    else:
        for name in result.names:
            out.data(name.name)

    out.print(f"\nSeed: {result.seed}", markup=False)
    return 0


def cmd_languages(args, out: Output):
    """List available languages."""
    language_ids = list_languages()
    if not language_ids:
        out.print("No languages found.")
        return 0

    rows = []
    for language_id in language_ids:
        try:
            language = load_language(language_id)
        except NameKitError as e:
            out.warning(f"{language_id}: {e}")
            continue
        rows.append([
            language.id,
            language.name,
            ', '.join(language.categories),
            language.metadata.difficulty or '-',
        ])
    out.table(['ID', 'Name', 'Categories', 'Difficulty'], rows)
    return 0


def cmd_categories(args, out: Output):
    """List a language's categories and their patterns."""
    language = load_language(args.language)
    rows = []
    for category in language.categories:
        for pattern in language.get_patterns(category):
            rows.append([category, pattern.template, f"{pattern.weight:g}", pattern.example or '-'])
    out.table(['Category', 'Pattern', 'Weight', 'Example'], rows, title=language.name)
    return 0


def cmd_validate(args, out: Output):
    """Validate a language file."""
    path = Path(args.file)
    if not path.is_file():
        out.error(f"File not found: {path}")
        return 1

    result = load_language_file(path)
    for issue in result.errors:
        if issue.fatal:
            out.error(f"[{issue.kind}] {issue}")
        else:
            out.warning(f"[{issue.kind}] {issue} (pattern dropped)")
    for issue in result.warnings:
        out.warning(f"[{issue.kind}] {issue}")

    if not result.ok:
        out.error(f"{path.name} is not a usable language")
        return 1

    language = result.language
    total = sum(len(language.get_patterns(c)) for c in language.categories)
    out.print(f"OK: {language.id} ({len(language.categories)} categories, {total} patterns)")
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='namekit',
        description='Generate fictional names from syllable patterns',
    )
    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')

    subparsers = parser.add_subparsers(dest='command')

    # Generate
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('language', help='Language id (see: namekit languages)')
    p.add_argument('category', help='Category, e.g. person_names')
    p.add_argument('-n', '--count', type=int,
                   default=get_setting('generation.default_count', 1),
                   help='Number of names (default: %(default)s)')
    p.add_argument('--seed', '-s', help='Seed for reproducible output')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    p.add_argument('--verbose', '-v', action='store_true', help='Show patterns and fragments')

    # Languages
    subparsers.add_parser('languages', aliases=['ls'], help='List available languages')

    # Categories
    p = subparsers.add_parser('categories', aliases=['cat'], help="List a language's categories")
    p.add_argument('language', help='Language id')

    # Validate
    p = subparsers.add_parser('validate', aliases=['val'], help='Validate a language file')
    p.add_argument('file', help='Path to a JSON or YAML language file')
    p.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(getattr(args, 'verbose', False))

    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        'ls': 'languages',
        'cat': 'categories',
        'val': 'validate',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'languages': cmd_languages,
        'categories': cmd_categories,
        'validate': cmd_validate,
    }

    handler = commands[command]
    try:
        return handler(args, out)
    except KeyboardInterrupt:
        out.print("\nCancelled.")
        return 130
    except NameKitError as e:
        out.error(str(e))
        return 1


if __name__ == '__main__':
    sys.exit(main())
