"""Settings for storyboard-palette, read from the environment and .env files.

Lookup order (first wins):
  1. OS environment variables.
  2. .env file at --env-file path (if explicitly provided).
  3. .env file walking up from cwd, stopping at .git (file or dir).

Walking stops at .git so a .env from outside the repo is never read.
Unlike a dotenv loader, nothing is written back into os.environ.

Variables:
  STORYBOARD_PALETTE_PATHS        default input roots, os.pathsep-separated
  STORYBOARD_PALETTE_EXTENSIONS   comma-separated suffixes (default .storyboard,.xib)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from storyboard_palette.core.discovery import DEFAULT_EXTENSIONS

PATHS_VAR = 'STORYBOARD_PALETTE_PATHS'
EXTENSIONS_VAR = 'STORYBOARD_PALETTE_EXTENSIONS'


@dataclass
class Settings:
    paths: list[str] = field(default_factory=list)
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    env_path: Path | None = None  # .env file the values were read from, if any


def find_env_file(start: Path) -> Path | None:
    """Walk up from start, return the first .env found, stop at the .git boundary."""
    current = start.resolve()
    while True:
        candidate = current / '.env'
        if candidate.is_file():
            return candidate
        if (current / '.git').exists():
            return None
        if current.parent == current:
            return None
        current = current.parent


def read_env_file(path: Path) -> dict[str, str]:
    """Parse KEY=value lines. Quotes around values are dropped, # comments skipped."""
    values: dict[str, str] = {}
    for line in path.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if not line or line.startswith('#') or '=' not in line:
            continue
        key, _, raw = line.partition('=')
        key = key.strip()
        if key:
            values[key] = raw.strip().strip('"').strip("'")
    return values


def _split_extensions(raw: str) -> tuple[str, ...]:
    exts = []
    for part in raw.split(','):
        part = part.strip()
        if part:
            exts.append(part if part.startswith('.') else f'.{part}')
    return tuple(exts) or DEFAULT_EXTENSIONS


def settings_from(values: Mapping[str, str]) -> Settings:
    paths = [p for p in values.get(PATHS_VAR, '').split(os.pathsep) if p]
    extensions = _split_extensions(values[EXTENSIONS_VAR]) if EXTENSIONS_VAR in values else DEFAULT_EXTENSIONS
    return Settings(paths=paths, extensions=extensions)


def load_settings(env_file: str | None = None, environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve settings. OS environment overrides the .env file key by key."""
    if environ is None:
        environ = os.environ

    if env_file:
        path: Path | None = Path(env_file)
        if not path.is_file():
            path = None
    else:
        path = find_env_file(Path.cwd())

    values = read_env_file(path) if path else {}
    values.update({k: v for k, v in environ.items() if k in (PATHS_VAR, EXTENSIONS_VAR)})

    settings = settings_from(values)
    settings.env_path = path
    return settings
