"""Unit tests for the top-level polyfact command group."""

import pytest
from click.testing import CliRunner

from polyfact import __version__
from polyfact.cli import main


@pytest.fixture
def runner():
    return CliRunner()


class TestMainGroup:
    def test_no_command_shows_help(self, runner):
        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "docs" in result.output
        assert "config" in result.output

    def test_short_help_option(self, runner):
        result = runner.invoke(main, ["-h"])

        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert f"polyfact, version {__version__}" in result.output

    def test_unknown_command_shows_help(self, runner):
        result = runner.invoke(main, ["publish"])

        assert result.exit_code == 2
        assert "No such command" in result.output
        assert "Usage:" in result.output

    def test_docs_help_lists_options(self, runner):
        result = runner.invoke(main, ["docs", "--help"])

        assert result.exit_code == 0
        for option in ("--name", "--deploy", "--doc_id", "--output", "--token"):
            assert option in result.output
