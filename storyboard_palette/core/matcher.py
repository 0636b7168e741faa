"""Colour matcher — decide which palette entries a raw colour node corresponds to.

Works on a node's attribute mapping (decimal strings for red/green/blue or
white, plus alpha). Only fully opaque colours (alpha == 1) are ever matched.

Primary rules, evaluated per palette entry and per canonical triple:
  1. achromatic entry, node has `white`, triple red == white
  2. achromatic entry, triple red == node red
  3. triple red/green/blue == node red/green/blue

All comparisons are done on 3-decimal strings (see palette.round3).
When nothing matches, grayscale nodes fall back to the nearest gray entry.
"""

from __future__ import annotations

from collections.abc import Mapping

import numpy as np

from storyboard_palette.core.palette import PaletteColor, Triple, get, gray_colours, lookup, round3

Attributes = Mapping[str, str]


def parse_channel(text: str | None) -> float | None:
    """Parse a decimal attribute value. None when missing or not a number."""
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def _rounded(attrib: Attributes, name: str) -> str | None:
    value = parse_channel(attrib.get(name))
    if value is None:
        return None
    return round3(value)


def is_opaque(attrib: Attributes) -> bool:
    return parse_channel(attrib.get('alpha')) == 1.0


def _triple_matches(colour: PaletteColor, triple: Triple, attrib: Attributes) -> bool:
    red = round3(triple[0])
    node_red = _rounded(attrib, 'red')

    if colour.is_achromatic and red == _rounded(attrib, 'white'):
        return True
    if colour.is_achromatic and red == node_red:
        return True
    return (
        red == node_red
        and round3(triple[1]) == _rounded(attrib, 'green')
        and round3(triple[2]) == _rounded(attrib, 'blue')
    )


def colour_matches(colour: PaletteColor, attrib: Attributes) -> bool:
    """True if any of the colour's triples matches the node under rules 1-3."""
    if not is_opaque(attrib):
        return False
    return any(_triple_matches(colour, triple, attrib) for triple in colour.triples)


def match_colours(attrib: Attributes) -> list[PaletteColor]:
    """Every palette entry the attributes match under rules 1-3, declaration order."""
    return [colour for colour in lookup() if colour_matches(colour, attrib)]


def is_gray_eligible(attrib: Attributes) -> bool:
    """A node takes part in the gray fallback if it has `white`, or equal red/green/blue."""
    if 'white' in attrib:
        return True
    red = _rounded(attrib, 'red')
    return red is not None and red == _rounded(attrib, 'green') == _rounded(attrib, 'blue')


def nearest_gray(value: float, grays: tuple[PaletteColor, ...] | None = None) -> PaletteColor:
    """Closest gray entry by red channel. Exact 0 and 1 short-circuit to black and white.

    Ties go to the earliest entry in `grays` (argmin returns the first minimum).
    """
    if value == 0:
        return get('black')
    if value == 1:
        return get('white')
    if grays is None:
        grays = gray_colours()
    reds = np.array([c.triples[0][0] for c in grays], dtype=float)
    return grays[int(np.argmin(np.abs(reds - value)))]


def match_gray(attrib: Attributes) -> PaletteColor | None:
    """Gray fallback for a node no primary rule matched. None when not applicable."""
    if not is_opaque(attrib) or not is_gray_eligible(attrib):
        return None
    source = 'white' if 'white' in attrib else 'red'
    value = parse_channel(attrib.get(source))
    if value is None:
        return None
    return nearest_gray(value)
