"""End-to-end tests: run the storyboard-palette CLI against the fixture documents."""

import json
import shutil
import sys
from pathlib import Path

import pytest
from storyboard_palette.__main__ import main
from storyboard_palette.core.config import EXTENSIONS_VAR, PATHS_VAR
from storyboard_palette.registry import all_commands, get

TESTS_DIR = Path(__file__).parent
FIXTURES_DIR = TESTS_DIR / 'fixtures'


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A throwaway repo holding copies of the fixtures, with no .env in reach."""
    (tmp_path / '.git').mkdir()
    inputs = tmp_path / 'Base.lproj'
    inputs.mkdir()
    for name in ('Main.storyboard', 'ProfileCell.xib'):
        shutil.copy(FIXTURES_DIR / name, inputs / name)
    shutil.copy(FIXTURES_DIR / 'Broken.txt', tmp_path / 'Broken.xib')
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(PATHS_VAR, raising=False)
    monkeypatch.delenv(EXTENSIONS_VAR, raising=False)
    return tmp_path


def _run(monkeypatch: pytest.MonkeyPatch, *argv: str) -> None:
    monkeypatch.setattr(sys, 'argv', ['storyboard-palette', *argv])
    main()


class TestRegistry:
    def test_discovers_commands(self):
        assert {'rewrite', 'scan'} <= set(all_commands())

    def test_unknown_command(self):
        with pytest.raises(KeyError):
            get('recolour')


class TestRewrite:
    def test_prints_banner_and_document(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'rewrite', 'Base.lproj/Main.storyboard')
        out = capsys.readouterr().out
        assert out.startswith('-----------------Main.storyboard-----------------\n<?xml version="1.0"')
        assert '<color key="textColor" name="poppyRed"/>' in out
        assert '<namedColor name="charcoal"/>' in out

    def test_directory_in_sorted_order(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'rewrite', 'Base.lproj')
        out = capsys.readouterr().out
        assert out.index('Main.storyboard---') < out.index('ProfileCell.xib---')

    def test_input_files_untouched_without_write(self, workspace, monkeypatch, capsys):
        before = (workspace / 'Base.lproj' / 'Main.storyboard').read_text()
        _run(monkeypatch, 'rewrite', 'Base.lproj')
        assert (workspace / 'Base.lproj' / 'Main.storyboard').read_text() == before

    def test_write_in_place(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'rewrite', 'Base.lproj', '--write')
        text = (workspace / 'Base.lproj' / 'ProfileCell.xib').read_text()
        assert '<color key="textColor" name="confidentOrange"/>' in text
        assert '<color key="backgroundColor" name="white"/>' in text
        assert capsys.readouterr().out == ''

    def test_output_dir(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'rewrite', 'Base.lproj', '--output-dir', 'out')
        assert (workspace / 'out' / 'Base.lproj' / 'Main.storyboard').is_file()
        assert (workspace / 'out' / 'Base.lproj' / 'ProfileCell.xib').is_file()

    def test_output_dir_keeps_localizations_apart(self, workspace, monkeypatch, capsys):
        localized = workspace / 'en.lproj'
        localized.mkdir()
        shutil.copy(FIXTURES_DIR / 'ProfileCell.xib', localized / 'ProfileCell.xib')
        _run(monkeypatch, 'rewrite', 'Base.lproj', 'en.lproj', '--output-dir', 'out')
        written = sorted(p.relative_to(workspace / 'out').as_posix() for p in (workspace / 'out').rglob('*.xib'))
        assert written == ['Base.lproj/ProfileCell.xib', 'en.lproj/ProfileCell.xib']

    def test_output_dir_refuses_same_destination_twice(self, workspace, monkeypatch, capsys):
        other = workspace / 'other'
        other.mkdir()
        (other / 'ProfileCell.xib').write_text('<document/>')
        _run(monkeypatch, 'rewrite', 'Base.lproj/ProfileCell.xib', 'other/ProfileCell.xib', '--output-dir', 'out')
        text = (workspace / 'out' / 'ProfileCell.xib').read_text()
        assert 'confidentOrange' in text
        assert 'already written' in capsys.readouterr().err

    def test_write_conflicts_with_output_dir(self, workspace, monkeypatch):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'rewrite', 'Base.lproj', '--write', '--output-dir', 'out')
        assert exc.value.code == 1

    def test_unparseable_file_skipped(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'rewrite', 'Broken.xib', 'Base.lproj/ProfileCell.xib')
        captured = capsys.readouterr()
        assert 'Broken.xib' in captured.err
        assert 'ProfileCell.xib---' in captured.out

    def test_paths_from_dotenv(self, workspace, monkeypatch, capsys):
        (workspace / '.env').write_text(f'{PATHS_VAR}=Base.lproj\n{EXTENSIONS_VAR}=.xib\n')
        _run(monkeypatch, 'rewrite')
        captured = capsys.readouterr()
        assert 'ProfileCell.xib---' in captured.out
        assert 'Main.storyboard' not in captured.out
        assert 'loaded' in captured.err


class TestScan:
    def test_json(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'scan', 'Base.lproj', '--json')
        parsed = json.loads(capsys.readouterr().out)
        docs = {Path(d['path']).name: d['commands']['scan'] for d in parsed['documents']}

        main_scan = docs['Main.storyboard']
        assert main_scan['used'] == ['ash', 'charcoal', 'latte', 'poppyRed']
        assert main_scan['rewritten'] == 4
        assert [u['hex'] for u in main_scan['unmatched']] == ['#1f578f', '#000000']

        cell_scan = docs['ProfileCell.xib']
        assert cell_scan['used'] == ['confidentOrange']
        assert cell_scan['backgrounds_added'] == 1

        assert parsed['summary'] == {'documents': 2, 'rewritten': 5, 'unmatched': 2}

    def test_text(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'scan', 'Base.lproj')
        out = capsys.readouterr().out
        assert 'storyboard-palette: 2 document(s)' in out
        assert 'REWRITTEN 5  UNMATCHED 2' in out

    def test_keyless_match_is_not_unmatched(self, workspace, monkeypatch, capsys):
        (workspace / 'System.xib').write_text(
            '<document><resources>'
            '<systemColor name="systemBackgroundColor"><color white="1" alpha="1"/></systemColor>'
            '</resources></document>'
        )
        _run(monkeypatch, 'scan', 'System.xib', '--json')
        (doc,) = json.loads(capsys.readouterr().out)['documents']
        scan = doc['commands']['scan']
        assert scan['used'] == ['white']
        assert scan['rewritten'] == 0
        assert scan['unmatched'] == []

    def test_nothing_written(self, workspace, monkeypatch, capsys):
        before = (workspace / 'Base.lproj' / 'Main.storyboard').read_text()
        _run(monkeypatch, 'scan', 'Base.lproj')
        assert (workspace / 'Base.lproj' / 'Main.storyboard').read_text() == before


class TestDiscoveryFailure:
    def test_no_inputs_exits(self, workspace, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'rewrite', 'does-not-exist')
        assert exc.value.code == 1
        assert 'path not found' in capsys.readouterr().err

    def test_no_paths_at_all_exits(self, workspace, monkeypatch):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'scan')
        assert exc.value.code == 1


class TestInfoCommands:
    def test_palette(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'palette')
        out = capsys.readouterr().out
        assert 'poppyRed' in out
        assert '#e03131' in out

    def test_help_for_command(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'help', 'scan')
        assert 'Dry run' in capsys.readouterr().out

    def test_help_lists_commands(self, workspace, monkeypatch, capsys):
        _run(monkeypatch, 'help')
        out = capsys.readouterr().out
        assert 'rewrite' in out
        assert 'scan' in out

    def test_help_unknown(self, workspace, monkeypatch):
        with pytest.raises(SystemExit):
            _run(monkeypatch, 'help', 'recolour')

    def test_no_command(self, workspace, monkeypatch):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch)
        assert exc.value.code == 1


class TestCommandOptions:
    def test_rewrite_has_no_json(self, workspace, monkeypatch):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'rewrite', 'Base.lproj', '--json')
        assert exc.value.code == 2

    def test_scan_has_no_write(self, workspace, monkeypatch):
        with pytest.raises(SystemExit) as exc:
            _run(monkeypatch, 'scan', 'Base.lproj', '--write')
        assert exc.value.code == 2

    def test_options_declared_per_command(self):
        flags = {name: {f for names, _ in cmd.arguments for f in names} for name, cmd in all_commands().items()}
        assert flags['rewrite'] == {'-w', '--write', '-o', '--output-dir'}
        assert flags['scan'] == {'-j', '--json'}
