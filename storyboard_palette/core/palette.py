"""Design-system palette — the fixed set of named colours a document may reference.

Each entry carries one or more canonical (red, green, blue) triples in
normalised [0, 1] space. Classification flags are explicit per entry and
encode design intent; they are never derived from the RGB values.

Declaration order is load-bearing: matching walks the palette in this order
and the nearest-gray tie-break picks the earliest declared entry.
"""

from __future__ import annotations

from dataclasses import dataclass

Triple = tuple[float, float, float]

DEFAULT_BACKGROUND = 'white'


@dataclass(frozen=True)
class PaletteColor:
    """A named palette colour and the raw triples it replaces."""

    name: str
    triples: tuple[Triple, ...]
    is_achromatic: bool = False  # black/white/gray family
    is_gray: bool = False  # nearest-match subset, excludes pure black/white


def _rgb(r: float, g: float, b: float) -> Triple:
    return (r / 255, g / 255, b / 255)


PALETTE: tuple[PaletteColor, ...] = (
    PaletteColor('ash', (_rgb(153, 153, 153),), is_achromatic=True, is_gray=True),
    PaletteColor('black', (_rgb(0, 0, 0),), is_achromatic=True),
    PaletteColor('charcoal', (_rgb(102, 102, 102),), is_achromatic=True, is_gray=True),
    PaletteColor(
        'confidentOrange',
        (
            _rgb(255, 84, 15),
            _rgb(69, 106, 168),
            _rgb(255, 115, 115),
            _rgb(255, 106, 106),
        ),
    ),
    PaletteColor('gray', (_rgb(214, 214, 214),), is_achromatic=True, is_gray=True),
    PaletteColor('latte', (_rgb(191, 134, 80),)),
    PaletteColor(
        'lemonade',
        (
            # 266 is out of range on purpose; comparison happens at 3 decimals
            _rgb(244, 248, 266),
            _rgb(255, 240, 240),
            _rgb(255, 247, 224),
        ),
    ),
    PaletteColor('lightgray', (_rgb(245, 245, 245),), is_achromatic=True, is_gray=True),
    PaletteColor('poppyRed', (_rgb(224, 49, 49),)),
    PaletteColor('warmYellow', (_rgb(255, 210, 103),)),
    PaletteColor('white', (_rgb(255, 255, 255),), is_achromatic=True),
)

_BY_NAME: dict[str, PaletteColor] = {c.name: c for c in PALETTE}


def lookup() -> tuple[PaletteColor, ...]:
    """Return every palette entry in declaration order."""
    return PALETTE


def get(name: str) -> PaletteColor:
    """Get a palette colour by name."""
    if name not in _BY_NAME:
        raise KeyError(f'Unknown palette colour: {name}. Available: {", ".join(c.name for c in PALETTE)}')
    return _BY_NAME[name]


def gray_colours() -> tuple[PaletteColor, ...]:
    return tuple(c for c in PALETTE if c.is_gray)


def round3(value: float) -> str:
    """Format a channel to 3 decimal places. Colours are only ever compared at this precision."""
    return f'{value:.3f}'


def to_byte(channel: float) -> int:
    """Normalised channel to 0-255, rounded and clamped."""
    return max(0, min(255, round(channel * 255)))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Normalised channels to #rrggbb, see to_byte."""
    rgb = to_byte(r) << 16 | to_byte(g) << 8 | to_byte(b)
    return f'#{rgb:06x}'
