"""Shared types for storyboard-palette: Command and Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from storyboard_palette.core.discovery import SourceFile


class Command:
    """A self-registering subcommand.

    Usage in a command module:

        command = Command(name='scan', help='Report colours without rewriting')
        command.argument('-j', '--json', action='store_true')

        @command.run
        def run(sources, report, args):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._run_fn: Callable | None = None
        self.arguments: list[tuple[tuple[str, ...], dict[str, Any]]] = []

    def argument(self, *flags: str, **kwargs: Any) -> None:
        """Declare an option that only this command takes (argparse add_argument signature)."""
        self.arguments.append((flags, kwargs))

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def execute(self, sources: list[SourceFile], report: Report, args: Any) -> None:
        """Execute the command's run function."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        self._run_fn(sources, report, args)


@dataclass
class Report:
    """Accumulates per-document results for text/JSON output."""

    documents: dict[str, dict[str, Any]] = field(default_factory=dict)
    rewritten_count: int = 0
    unmatched_count: int = 0
    skipped: list[str] = field(default_factory=list)

    def add(self, document: str, command_name: str, data: dict[str, Any]) -> None:
        """Add command results for a document."""
        if document not in self.documents:
            self.documents[document] = {}
        self.documents[document][command_name] = data

    def record_rewritten(self, count: int) -> None:
        self.rewritten_count += count

    def record_unmatched(self, count: int) -> None:
        self.unmatched_count += count

    def record_skipped(self, path: str) -> None:
        self.skipped.append(path)
