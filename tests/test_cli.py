"""CLI tests driven through typer's CliRunner."""
import json

import pytest
from typer.testing import CliRunner

from component_audit.main import EXIT_DISCOVERY_FAILURE, EXIT_WRITE_FAILURE, app

from conftest import FIXTURES_DIR, KIBBLE

SAMPLE_APP = FIXTURES_DIR / 'sample_app'

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('COMPONENT_AUDIT_LIBRARIES', 'COMPONENT_AUDIT_EXCLUDE',
                 'COMPONENT_AUDIT_CSV', 'COMPONENT_AUDIT_JSON', 'COMPONENT_AUDIT_WORKERS'):
        monkeypatch.delenv(name, raising=False)


def _scan(tmp_path, *extra):
    csv_path = tmp_path / 'component_report.csv'
    json_path = tmp_path / 'report.json'
    result = runner.invoke(app, [
        'scan', str(SAMPLE_APP), '--csv', str(csv_path), '--json', str(json_path), *extra,
    ])
    return result, csv_path, json_path


class TestScan:

    def test_writes_both_reports(self, tmp_path):
        result, csv_path, json_path = _scan(tmp_path, '--quiet')

        assert result.exit_code == 0, result.output
        records = json.loads(json_path.read_text(encoding='utf-8'))
        button = next(r for r in records if r['component'] == 'Button')
        assert button['library'] == KIBBLE
        assert button['import_count'] == 2
        assert button['usage_count'] == 3
        assert csv_path.read_text(encoding='utf-8').startswith('Library,Component,')

    def test_broken_file_warns_but_succeeds(self, tmp_path):
        result, _, json_path = _scan(tmp_path, '--quiet')

        assert result.exit_code == 0
        assert 'Broken.tsx' in result.output
        files = [f for r in json.loads(json_path.read_text()) for f in r['files']]
        assert 'src/Broken.tsx' not in files

    def test_summary_output(self, tmp_path):
        result, _, _ = _scan(tmp_path)

        assert result.exit_code == 0, result.output
        assert 'Files scanned: 5' in result.output
        assert 'Never rendered: 3' in result.output
        assert result.output.count('Report written') == 2

    def test_quiet_suppresses_report_confirmation(self, tmp_path):
        result, _, _ = _scan(tmp_path, '--quiet')

        assert result.exit_code == 0
        assert 'Report written' not in result.output

    def test_library_option_restricts_tracking(self, tmp_path):
        result, _, json_path = _scan(tmp_path, '--quiet', '-L', '@mui/material')

        assert result.exit_code == 0
        libraries = {r['library'] for r in json.loads(json_path.read_text())}
        assert libraries == {'@mui/material'}

    def test_with_manifest_wraps_json(self, tmp_path):
        result, _, json_path = _scan(tmp_path, '--quiet', '--with-manifest')

        assert result.exit_code == 0
        payload = json.loads(json_path.read_text())
        assert payload['project']['name'] == 'sample-app'
        assert '@vetsource/kibble' in payload['project']['dependencies']
        assert len(payload['components']) == 6

    def test_threaded_scan_matches(self, tmp_path):
        _, _, sequential = _scan(tmp_path / 'seq', '--quiet')
        result, _, threaded = _scan(tmp_path / 'thr', '--quiet', '--workers', '4')

        assert result.exit_code == 0
        assert json.loads(threaded.read_text()) == json.loads(sequential.read_text())

    def test_missing_root_exits_with_discovery_code(self, tmp_path):
        result = runner.invoke(app, ['scan', str(tmp_path / 'missing'), '--quiet'])

        assert result.exit_code == EXIT_DISCOVERY_FAILURE
        assert 'does not exist' in result.output

    def test_write_failure_is_signalled(self, tmp_path):
        blocker = tmp_path / 'blocker'
        blocker.write_text('file, not directory')
        json_path = tmp_path / 'report.json'

        result = runner.invoke(app, [
            'scan', str(SAMPLE_APP), '--quiet',
            '--csv', str(blocker / 'component_report.csv'),
            '--json', str(json_path),
        ])

        assert result.exit_code == EXIT_WRITE_FAILURE
        assert 'Could not write' in result.output
        # The other report is still produced
        assert json_path.exists()


class TestDeps:

    def test_lists_declared_dependencies(self):
        result = runner.invoke(app, ['deps', str(SAMPLE_APP)])

        assert result.exit_code == 0, result.output
        assert 'sample-app' in result.output
        assert '@vetsource/icons' in result.output

    def test_missing_manifest(self, tmp_path):
        result = runner.invoke(app, ['deps', str(tmp_path)])

        assert result.exit_code == 0
        assert 'unknown' in result.output


def test_version():
    result = runner.invoke(app, ['--version'])

    assert result.exit_code == 0
    assert 'component-audit' in result.output
