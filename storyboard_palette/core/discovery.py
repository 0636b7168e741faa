"""Find storyboard/xib files on disk and read them.

Directories are searched recursively and their matches sorted, so runs are
deterministic. Files named explicitly are taken whatever their suffix.
Unreadable files are skipped with a note on stderr; finding nothing at all
is an error that aborts the whole run.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

DEFAULT_EXTENSIONS = ('.storyboard', '.xib')


class DiscoveryError(Exception):
    """Raised when no input documents can be found."""


@dataclass
class SourceFile:
    path: str
    text: str
    relative: str = ''  # path under the input root, starting with the root directory's own name


def _candidates(paths: list[str], extensions: tuple[str, ...]) -> list[tuple[Path, str]]:
    """(file, relative name) pairs. Files inside a directory keep the directory name as their first part."""
    found: list[tuple[Path, str]] = []
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            root_name = path.resolve().name
            for p in sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in extensions):
                found.append((p, (Path(root_name) / p.relative_to(path)).as_posix()))
        elif path.is_file():
            found.append((path, path.name))
    return found


def discover_documents(paths: list[str], extensions: tuple[str, ...] = DEFAULT_EXTENSIONS) -> list[SourceFile]:
    """Return (path, text) for every input document, in input order."""
    if not paths:
        raise DiscoveryError('no input paths given')
    candidates = _candidates(paths, extensions)
    if not candidates:
        raise DiscoveryError(f'path not found: no {"/".join(extensions)} files under {", ".join(paths)}')

    sources = []
    for path, relative in candidates:
        try:
            text = path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            print(f'storyboard-palette: skipping {path}: {e}', file=sys.stderr)
            continue
        sources.append(SourceFile(path=str(path), text=text, relative=relative))
    return sources
