"""Report builder — text and JSON output for scan results."""

import json
from typing import Any

from storyboard_palette.core.types import Report


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'storyboard-palette: {len(report.documents)} document(s)', '']

    for path, commands in report.documents.items():
        lines.append(f'── {path}')
        for command_name, data in commands.items():
            if command_name == 'scan':
                used = ', '.join(data.get('used', [])) or '-'
                lines.append(f'  named colours: {used}')
                lines.append(f'  rewritten: {data.get("rewritten", 0)}')
                added = data.get('backgrounds_added', 0)
                if added:
                    lines.append(f'  cell backgrounds added: {added}')
                unmatched = data.get('unmatched', [])
                lines.append(f'  unmatched: {len(unmatched)}')
                for colour in unmatched:
                    r, g, b = colour['rgb']
                    lines.append(f'    {colour["key"] or "?":<24} ({r}, {g}, {b})  {colour["hex"]}  alpha={colour["alpha"]}')
            else:
                # Generic fallback
                for k, v in data.items():
                    lines.append(f'  {command_name}.{k}: {v}')
        lines.append('')

    for path in report.skipped:
        lines.append(f'skipped: {path}')
    lines.append(f'REWRITTEN {report.rewritten_count}  UNMATCHED {report.unmatched_count}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {'documents': []}
    for path, commands in report.documents.items():
        obj['documents'].append({'path': path, 'commands': commands})
    obj['skipped'] = list(report.skipped)
    obj['summary'] = {
        'documents': len(report.documents),
        'rewritten': report.rewritten_count,
        'unmatched': report.unmatched_count,
    }
    return json.dumps(obj, indent=2)
