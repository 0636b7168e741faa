"""Tree walker — visit every element of a document, rewrite colours, fill in cell backgrounds.

Depth-first, pre-order, siblings in document order. The set of palette names
used by the document is threaded through explicitly; nothing is kept at
module level between documents.
"""

from __future__ import annotations

from lxml import etree

from storyboard_palette.core.matcher import colour_matches, is_opaque, match_gray
from storyboard_palette.core.palette import DEFAULT_BACKGROUND, lookup
from storyboard_palette.core.rewriter import rewrite_node

COLOR_TAG = 'color'
CELL_CONTENT_VIEW_TAG = 'tableViewCellContentView'
BACKGROUND_KEY = 'backgroundColor'


INDENT = '    '  # Xcode's indentation step


def _line_indent(node: etree._Element) -> str | None:
    """Whitespace the node's line starts with, or None when it does not start a line."""
    previous = node.getprevious()
    if previous is not None:
        before = previous.tail
    else:
        parent = node.getparent()
        before = parent.text if parent is not None else None
    if not before or '\n' not in before:
        return None
    return before.rsplit('\n', 1)[1]


def append_child(parent: etree._Element, tag: str, attrib: dict[str, str]) -> etree._Element:
    """Append a child element, reusing the indentation of its siblings.

    The first child of an empty parent is indented one step deeper than the
    parent when the parent sits on its own line. Compact markup stays compact.
    """
    children = list(parent)
    child = etree.SubElement(parent, tag, attrib)
    if len(children):
        last = children[-1]
        child.tail = last.tail
        last.tail = parent.text
        return child

    indent = _line_indent(parent)
    if indent is not None:
        parent.text = f'\n{indent}{INDENT}'
        child.tail = f'\n{indent}'
    return child


def _apply_primary(node: etree._Element) -> set[str]:
    """Walk the palette in order and rewrite on every rule 1-3 match.

    Matching reads the live node, so once a keyed node is rewritten its
    channels are gone and later entries no longer match it.
    """
    matched: set[str] = set()
    for colour in lookup():
        if colour_matches(colour, node.attrib):
            rewrite_node(node, colour)
            matched.add(colour.name)
    return matched


def visit_colour(node: etree._Element) -> set[str]:
    """Match and rewrite one colour node. Returns the palette names it now uses."""
    if not is_opaque(node.attrib):
        return set()
    matched = _apply_primary(node)
    if matched:
        return matched
    gray = match_gray(node.attrib)
    if gray is None:
        return set()
    rewrite_node(node, gray)
    return {gray.name}


def needs_background(node: etree._Element) -> bool:
    """True if none of the direct children is a colour with key="backgroundColor"."""
    for child in node:
        if isinstance(child.tag, str) and COLOR_TAG in child.tag and child.get('key') == BACKGROUND_KEY:
            return False
    return True


def ensure_background(node: etree._Element) -> bool:
    """Give a cell content view a white background colour if it has none. True if one was added."""
    if not needs_background(node):
        return False
    append_child(node, COLOR_TAG, {'key': BACKGROUND_KEY, 'name': DEFAULT_BACKGROUND})
    return True


def visit(node: etree._Element, used: set[str] | None = None) -> set[str]:
    """Process `node` and all its descendants. Returns the accumulated used names."""
    if used is None:
        used = set()
    if not isinstance(node.tag, str):
        # comments and processing instructions
        return used

    if COLOR_TAG in node.tag:
        used |= visit_colour(node)
    if CELL_CONTENT_VIEW_TAG in node.tag:
        ensure_background(node)

    for child in node:
        visit(child, used)
    return used
