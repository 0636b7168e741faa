"""Parsed storyboard/xib documents: parse, process, finalise, serialise.

One Document per input file. `process` walks the tree, then appends one
`<namedColor name=".."/>` to `<document><resources>` for every palette
name the walk introduced.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from lxml import etree

from storyboard_palette.core.discovery import SourceFile
from storyboard_palette.core.palette import lookup
from storyboard_palette.core.types import Report
from storyboard_palette.core.walker import append_child, visit

RESOURCES_TAG = 'resources'
NAMED_COLOR_TAG = 'namedColor'

# lxml reports standalone=False both for "no" and for no flag at all
_STANDALONE = re.compile(r'\s*<\?xml[^>]*?\bstandalone\s*=\s*["\'](yes|no)["\']')


class DocumentError(Exception):
    """Raised when a document cannot be parsed."""


@dataclass
class Document:
    """One parsed input file."""

    path: str
    root: etree._Element
    standalone: str | None = None  # "yes"/"no" as written in the source declaration
    relative: str = ''

    @property
    def name(self) -> str:
        return Path(self.path).name if self.path else '(memory)'

    @property
    def output_name(self) -> str:
        """Where the document goes under an output directory."""
        return self.relative or self.name


def parse_document(text: str, path: str = '') -> Document:
    """Parse storyboard/xib text. Raises DocumentError on malformed XML."""
    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
    try:
        root = etree.fromstring(text.encode('utf-8'), parser)
    except etree.XMLSyntaxError as e:
        raise DocumentError(f'{path or "document"}: {e}') from e
    m = _STANDALONE.match(text)
    return Document(path=path, root=root, standalone=m.group(1) if m else None)


def serialize(document: Document) -> str:
    """Serialise back to text with a double-quoted XML declaration, as Xcode writes it."""
    tree = document.root.getroottree()
    info = tree.docinfo
    decl = f'<?xml version="{info.xml_version or "1.0"}" encoding="{info.encoding or "UTF-8"}"'
    if document.standalone:
        decl += f' standalone="{document.standalone}"'
    decl += '?>'
    body = etree.tostring(tree, encoding='unicode')
    return f'{decl}\n{body}\n'


def resources(document: Document) -> etree._Element:
    """The document's <resources> table, created at the end of the root if missing."""
    table = document.root.find(RESOURCES_TAG)
    if table is None:
        table = append_child(document.root, RESOURCES_TAG, {})
    return table


def finalize(document: Document, used: set[str]) -> list[str]:
    """Declare every used palette name in the resources table, then clear `used`.

    Names are appended in palette order. Returns the names appended.
    """
    names = [c.name for c in lookup() if c.name in used]
    if names:
        table = resources(document)
        for name in names:
            append_child(table, NAMED_COLOR_TAG, {'name': name})
    used.clear()
    return names


def process(document: Document) -> Document:
    """Rewrite colours and declare the named colours used. Mutates and returns `document`."""
    used = visit(document.root, set())
    finalize(document, used)
    return document


def iter_documents(sources: list[SourceFile], report: Report) -> Iterator[Document]:
    """Parse each source in order. Unparseable ones are noted on stderr and skipped."""
    for source in sources:
        try:
            document = parse_document(source.text, source.path)
        except DocumentError as e:
            print(f'storyboard-palette: skipping {e}', file=sys.stderr)
            report.record_skipped(source.path)
            continue
        document.relative = source.relative
        yield document
