"""Shared fixtures for the component audit tests."""
import io
from pathlib import Path

import pytest

from component_audit.analyzer.parser import SourceParser
from component_audit.utils.safe_console import SafeConsole


KIBBLE = '@vetsource/kibble'
MUI = '@mui/material'
TRACKED = (KIBBLE, MUI)

FIXTURES_DIR = Path(__file__).parent / 'fixtures'


@pytest.fixture
def parse():
    """Parse source text with the grammar for a file name, return the root node."""
    def _parse(code: str, file_name: str = 'Component.tsx'):
        parser = SourceParser.from_file_extension(file_name)
        return parser.parse_source(code.encode('utf-8'), file_name).root_node
    return _parse


@pytest.fixture
def quiet_console():
    """Console writing into a buffer; read it back via .file.getvalue()."""
    return SafeConsole(file=io.StringIO(), width=200)


@pytest.fixture
def make_project(tmp_path):
    """Write a {relative path: source} mapping under tmp_path and return the root."""
    def _make(files: dict) -> Path:
        for rel, content in files.items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding='utf-8')
        return tmp_path
    return _make
