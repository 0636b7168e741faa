"""Dry run: report what rewrite would change, without touching any file.

Per document: the palette names that would be declared, how many colour
nodes would be rewritten, how many cell backgrounds would be added, and
every colour left unmatched with its 0-255 RGB value and hex code.
Colours that are not fully opaque always show up as unmatched. A colour
without a key matches but cannot be rewritten: its name is still declared,
and it is listed as neither rewritten nor unmatched.

Example:
    uv run storyboard-palette scan Base.lproj/
    uv run storyboard-palette scan Base.lproj/ --json
"""

from typing import Any

from lxml import etree

from storyboard_palette.core.discovery import SourceFile
from storyboard_palette.core.document import finalize, iter_documents
from storyboard_palette.core.matcher import match_colours, match_gray, parse_channel
from storyboard_palette.core.palette import rgb_to_hex, to_byte
from storyboard_palette.core.types import Command, Report
from storyboard_palette.core.walker import CELL_CONTENT_VIEW_TAG, COLOR_TAG, needs_background, visit

command = Command(
    name='scan',
    help='Report matched and unmatched colours per document. Nothing is written.',
)
command.argument('-j', '--json', action='store_true', help='Output JSON instead of text')


def _tagged(root: etree._Element, fragment: str) -> list[etree._Element]:
    return [el for el in root.iter() if isinstance(el.tag, str) and fragment in el.tag]


def _describe(attrib: dict[str, str]) -> dict[str, Any]:
    if 'white' in attrib:
        r = g = b = parse_channel(attrib['white']) or 0.0
    else:
        r, g, b = (parse_channel(attrib.get(c)) or 0.0 for c in ('red', 'green', 'blue'))
    return {
        'key': attrib.get('key'),
        'rgb': [to_byte(r), to_byte(g), to_byte(b)],
        'hex': rgb_to_hex(r, g, b),
        'alpha': attrib.get('alpha'),
    }


@command.run
def run(sources: list[SourceFile], report: Report, args) -> None:
    for document in iter_documents(sources, report):
        root = document.root
        before = [(el, dict(el.attrib)) for el in _tagged(root, COLOR_TAG)]
        missing_bg = sum(1 for el in _tagged(root, CELL_CONTENT_VIEW_TAG) if needs_background(el))

        used = visit(root, set())
        names = finalize(document, used)

        rewritten = 0
        unmatched = []
        for el, attrib in before:
            if dict(el.attrib) != attrib:
                rewritten += 1
            elif ('white' in attrib or 'red' in attrib) and not (match_colours(attrib) or match_gray(attrib)):
                unmatched.append(_describe(attrib))

        report.record_rewritten(rewritten)
        report.record_unmatched(len(unmatched))
        report.add(
            document.path,
            'scan',
            {
                'used': names,
                'rewritten': rewritten,
                'backgrounds_added': missing_bg,
                'unmatched': unmatched,
            },
        )
