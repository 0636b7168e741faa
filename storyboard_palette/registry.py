"""Subcommand lookup.

Every module in storyboard_palette/commands/ that defines a module-level
`command` (a Command) becomes a subcommand under `command.name`.
Modules whose name starts with an underscore are ignored.
"""

import importlib
import pkgutil
from functools import cache

import storyboard_palette.commands as commands_pkg
from storyboard_palette.core.types import Command


@cache
def all_commands() -> dict[str, Command]:
    """Name -> Command for every command module, imported once."""
    found: dict[str, Command] = {}
    for info in pkgutil.iter_modules(commands_pkg.__path__):
        if info.name.startswith('_'):
            continue
        module = importlib.import_module(f'{commands_pkg.__name__}.{info.name}')
        cmd = getattr(module, 'command', None)
        if isinstance(cmd, Command):
            found[cmd.name] = cmd
    return found


def get(name: str) -> Command:
    commands = all_commands()
    if name not in commands:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(commands))}')
    return commands[name]
