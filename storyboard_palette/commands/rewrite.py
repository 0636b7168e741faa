"""Rewrite inline colours to named palette colours and print or save the result.

For every document: colours matching the palette become
<color key=".." name=".."/>, table-view cell content views without a
background get a white one, and each palette name used is declared once in
<resources> as <namedColor name=".."/>.

By default each rewritten document is printed after a
-----------------<file name>----------------- banner.
--write saves over the input files. --output-dir writes copies there,
mirroring the input tree (Base.lproj/Main.storyboard stays apart from
en.lproj/Main.storyboard). A second document bound for the same
destination is refused.

Example:
    uv run storyboard-palette rewrite Base.lproj/
    uv run storyboard-palette rewrite Main.storyboard Cell.xib --write
    uv run storyboard-palette rewrite Base.lproj/ en.lproj/ --output-dir ./out
"""

import os
import sys

from storyboard_palette.core.discovery import SourceFile
from storyboard_palette.core.document import iter_documents, process, serialize
from storyboard_palette.core.types import Command, Report

command = Command(
    name='rewrite',
    help='Replace palette-matching colours with named colours. Print or save the documents.',
)
command.argument('-w', '--write', action='store_true', help='Save rewritten documents over the inputs')
command.argument('-o', '--output-dir', metavar='DIR', help='Write rewritten documents into DIR, mirroring the inputs')


def _banner(name: str) -> str:
    return f'-----------------{name}-----------------'


@command.run
def run(sources: list[SourceFile], report: Report, args) -> None:
    output_dir = getattr(args, 'output_dir', None)
    write = getattr(args, 'write', False)
    written: set[str] = set()

    for document in iter_documents(sources, report):
        text = serialize(process(document))

        if write:
            dest = document.path
        elif output_dir:
            dest = os.path.join(output_dir, *document.output_name.split('/'))
        else:
            print(_banner(document.name) + '\n' + text)
            report.add(document.path, 'rewrite', {'output': '-'})
            continue

        key = os.path.normcase(os.path.abspath(dest))
        if key in written:
            print(f'storyboard-palette: not writing {document.path}: {dest} already written', file=sys.stderr)
            report.record_skipped(document.path)
            continue
        written.add(key)

        os.makedirs(os.path.dirname(dest) or '.', exist_ok=True)
        with open(dest, 'w', encoding='utf-8') as f:
            f.write(text)
        print(f'storyboard-palette: wrote {dest}', file=sys.stderr)
        report.add(document.path, 'rewrite', {'output': dest})
