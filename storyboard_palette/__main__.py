"""storyboard-palette — Replace inline colours in storyboards and xibs with named palette colours.

Usage: uv run storyboard-palette <command> [paths...] [options]

Commands are auto-discovered from storyboard_palette/commands/.
Each command module's docstring is its documentation.
Run `storyboard-palette help <command>` for full module docs.

Input paths:
  Files and directories given on the command line; directories are searched
  recursively for .storyboard and .xib files. Without paths, the
  STORYBOARD_PALETTE_PATHS setting is used.

Environment variables / .env loading:
  OS environment variables are always used first.
  If a variable is not set, storyboard-palette looks for a .env file starting
  from the current directory and walking up, stopping at the nearest .git
  boundary. Use --env-file to override the .env location explicitly.
"""

import argparse
import importlib
import sys

from storyboard_palette import registry
from storyboard_palette.core.config import load_settings
from storyboard_palette.core.discovery import DiscoveryError, discover_documents
from storyboard_palette.core.palette import lookup, rgb_to_hex
from storyboard_palette.core.report import format_json, format_text
from storyboard_palette.core.types import Report


def _load_command_module(name: str) -> object:
    """Load the raw module for a command (for docstring access)."""
    return importlib.import_module(f'storyboard_palette.commands.{name}')


def _short_doc(name: str, fallback: str) -> str:
    doc = (_load_command_module(name).__doc__ or '').strip()
    return doc.splitlines()[0] if doc else fallback


def _build_parser() -> argparse.ArgumentParser:
    commands = registry.all_commands()

    epilog = (
        'Examples:\n'
        '  storyboard-palette scan Base.lproj/\n'
        '  storyboard-palette scan Base.lproj/ --json\n'
        '  storyboard-palette rewrite Main.storyboard\n'
        '  storyboard-palette rewrite Base.lproj/ --write\n'
        '  storyboard-palette rewrite Base.lproj/ --output-dir ./out\n'
        '  storyboard-palette palette\n'
        '  storyboard-palette help rewrite\n'
        '\n'
        'Settings (set in .env or environment):\n'
        '  STORYBOARD_PALETTE_PATHS       default inputs, separated by the OS path separator\n'
        '  STORYBOARD_PALETTE_EXTENSIONS  suffixes to search for (default .storyboard,.xib)\n'
    )
    parser = argparse.ArgumentParser(
        prog='storyboard-palette',
        description='Replace inline colours in storyboards and xibs with named palette colours.',
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    # Global --env-file option before subcommand
    parser.add_argument(
        '--env-file',
        metavar='PATH',
        default=None,
        help='Path to .env file (default: walk up from cwd to .git boundary)',
    )
    sub = parser.add_subparsers(dest='command', help='Command to run')

    # Auto-register each command as a subcommand using module docstring
    for name, cmd in sorted(commands.items()):
        p = sub.add_parser(name, help=_short_doc(name, cmd.help))
        p.add_argument('paths', nargs='*', help='Storyboard/xib files or directories to search')
        for flags, kwargs in cmd.arguments:
            p.add_argument(*flags, **kwargs)

    # `help` subcommand — prints full module docstring for a command
    help_parser = sub.add_parser('help', help='Print full docs for a command')
    help_parser.add_argument('topic', nargs='?', help='Command name')

    # `palette` subcommand — prints the palette table
    sub.add_parser('palette', help='Print the named colour palette')

    return parser


def _print_help(topic: str | None) -> None:
    """Print full module docstring for a command."""
    commands = registry.all_commands()

    if topic is None:
        print('Available commands:\n')
        for name, cmd in sorted(commands.items()):
            print(f'  {name:<10} {_short_doc(name, cmd.help)}')
        print('\nRun: storyboard-palette help <command> for full docs.')
        return

    if topic not in commands:
        print(f'Unknown command: {topic}', file=sys.stderr)
        print(f'Available: {", ".join(sorted(commands))}', file=sys.stderr)
        sys.exit(1)

    doc = (_load_command_module(topic).__doc__ or '').strip()
    if not doc:
        print(f'(No module docs for {topic!r})')
        return
    print(doc)


def _print_palette() -> None:
    for colour in lookup():
        flags = 'gray' if colour.is_gray else 'achromatic' if colour.is_achromatic else ''
        hexes = ' '.join(rgb_to_hex(*triple) for triple in colour.triples)
        print(f'  {colour.name:<16} {flags:<11} {hexes}')


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Settings before anything else — OS env vars always win over .env
    settings = load_settings(env_file=getattr(args, 'env_file', None))
    if settings.env_path:
        print(f'storyboard-palette: loaded {settings.env_path}', file=sys.stderr)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == 'help':
        _print_help(getattr(args, 'topic', None))
        return

    if args.command == 'palette':
        _print_palette()
        return

    if getattr(args, 'write', False) and getattr(args, 'output_dir', None):
        print('Error: --write and --output-dir are mutually exclusive', file=sys.stderr)
        sys.exit(1)

    # Discovery failure aborts the whole run; unreadable files are skipped inside
    try:
        sources = discover_documents(args.paths or settings.paths, settings.extensions)
    except DiscoveryError as e:
        print(f'Error: {e}', file=sys.stderr)
        sys.exit(1)

    report = Report()
    cmd = registry.get(args.command)
    cmd.execute(sources, report, args)

    # Output
    if args.command == 'rewrite':
        pass  # rewrite prints or writes its own output
    elif getattr(args, 'json', False):
        print(format_json(report))
    else:
        print(format_text(report))


if __name__ == '__main__':
    main()
