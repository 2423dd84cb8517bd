"""Test the generate command."""

import pytest
from typer.testing import CliRunner

from mcp_isi_server import config
from mcp_isi_server.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def reset_settings():
    config._settings = None
    yield
    config._settings = None


def test_generate_from_stdin():
    """Test that text piped on stdin is rendered to stdout."""
    result = runner.invoke(app, ["generate"], input="**Important\n-Side effect\nRegular line\n")

    assert result.exit_code == 0
    assert result.output.startswith('<table cellpadding="0"')
    assert result.output.count("\n\t\t\t\t<tr>") == 3
    assert "&bull;" in result.output


def test_generate_from_file_keeps_line_endings(tmp_path):
    """Test that line endings read from a file are kept when splitting rows."""
    source = tmp_path / "isi.txt"
    source.write_bytes(b"a\r\nb\rc\nd")

    result = runner.invoke(app, ["generate", str(source)])

    assert result.exit_code == 0
    assert result.output.count("\n\t\t\t\t<tr>") == 4


def test_generate_with_options():
    """Test that style options are applied."""
    result = runner.invoke(
        app,
        ["generate", "--font-size", "12", "--table-color", "#EEEEEE", "--bullets", "--bullet-color", "#FF0000"],
        input="-Item",
    )

    assert result.exit_code == 0
    assert "font-size: 12px;" in result.output
    assert 'bgcolor="#EEEEEE"' in result.output
    assert "color: #FF0000;" in result.output


def test_generate_invalid_options():
    """Test that invalid options print one error per field and exit with 1."""
    result = runner.invoke(app, ["generate", "--padding", "wide", "--font-color", "red"], input="Line")

    assert result.exit_code == 1
    assert "padding: Padding needs to be a number" in result.output
    assert "font_color: Font color needs to be a valid hex color" in result.output


def test_generate_empty_text():
    """Test that empty input is rejected."""
    result = runner.invoke(app, ["generate"], input="")

    assert result.exit_code == 1
    assert "isi_text: ISI text is required" in result.output


def test_generate_missing_file(tmp_path):
    """Test that an unreadable source file is reported without a traceback."""
    missing = tmp_path / "missing.txt"

    result = runner.invoke(app, ["generate", str(missing)])

    assert result.exit_code == 1
    assert f"Cannot read {missing}" in result.output
    assert not isinstance(result.exception, FileNotFoundError)
