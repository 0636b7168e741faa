"""Node rewriter — turn a raw colour node into a named palette reference."""

from lxml import etree

from storyboard_palette.core.palette import PaletteColor


def rewrite_node(node: etree._Element, colour: PaletteColor) -> bool:
    """Replace the node's attributes with exactly `key` and `name`.

    Nodes without a `key` are left untouched and False is returned.
    """
    key = node.get('key')
    if key is None:
        return False
    node.attrib.clear()
    node.set('key', key)
    node.set('name', colour.name)
    return True
