"""Unit tests for the `polyfact docs` command.

Tests cover:
- Missing token handling (no network, no folder read)
- Token resolution from flag, environment and config file
- Option plumbing into the pipeline
- Error reporting
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from polyfact.cli import main
from polyfact.docs.errors import PollTimeoutError
from polyfact.docs.models import DocsResult

TOKEN = "pk_test_token_123"  # noqa: S105 - test value


@pytest.fixture
def runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def mock_generator():
    """Mock DocsGenerator as used by the docs command."""
    with patch("polyfact.commands.docs.DocsGenerator") as mock:
        mock.return_value.run.return_value = DocsResult(doc_id="abc123", name="abc123")
        yield mock


class TestMissingToken:
    def test_prints_message_and_makes_no_call(self, runner, mock_request, project_dir):
        with patch("polyfact.commands.docs.DocsGenerator") as mock_generator, patch(
            "polyfact.docs.generator.get_json_folder_representation"
        ) as mock_folder:
            result = runner.invoke(main, ["docs", str(project_dir)])

        assert "Please provide a polyfact token using the -t option" in result.output
        assert "https://app.polyfact.com/" in result.output
        assert result.exit_code == 1
        mock_generator.assert_not_called()
        mock_folder.assert_not_called()
        mock_request.assert_not_called()

    def test_empty_token_is_missing(self, runner, mock_generator, project_dir):
        result = runner.invoke(main, ["docs", str(project_dir), "-t", ""])

        assert "Please provide a polyfact token" in result.output
        mock_generator.assert_not_called()


class TestTokenResolution:
    def test_token_flag(self, runner, mock_generator, project_dir):
        result = runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN])

        assert result.exit_code == 0, result.output
        assert mock_generator.call_args.kwargs["token"] == TOKEN

    def test_token_from_environment(self, runner, mock_generator, project_dir, monkeypatch):
        monkeypatch.setenv("POLYFACT_TOKEN", "pk_env_token_456")

        result = runner.invoke(main, ["docs", str(project_dir)])

        assert result.exit_code == 0, result.output
        assert mock_generator.call_args.kwargs["token"] == "pk_env_token_456"

    def test_token_from_config_file(self, runner, mock_generator, project_dir):
        runner.invoke(main, ["config", "set", "token", "pk_file_token_789"])

        result = runner.invoke(main, ["docs", str(project_dir)])

        assert result.exit_code == 0, result.output
        assert mock_generator.call_args.kwargs["token"] == "pk_file_token_789"

    def test_flag_wins_over_environment(self, runner, mock_generator, project_dir, monkeypatch):
        monkeypatch.setenv("POLYFACT_TOKEN", "pk_env_token_456")

        runner.invoke(main, ["docs", str(project_dir), "--token", TOKEN])

        assert mock_generator.call_args.kwargs["token"] == TOKEN

    def test_poll_settings_from_environment(
        self, runner, mock_generator, project_dir, monkeypatch
    ):
        monkeypatch.setenv("POLYFACT_PROGRESS_POLL_INTERVAL", "0.5")
        monkeypatch.setenv("POLYFACT_POLL_TIMEOUT", "90")

        runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN])

        config = mock_generator.call_args.kwargs["config"]
        assert config.progress_poll_interval == 0.5
        assert config.status_poll_interval == 1.0
        assert config.poll_timeout == 90.0


class TestOptions:
    def test_all_options_passed_to_pipeline(self, runner, mock_generator, project_dir, tmp_path):
        output = tmp_path / "out"

        result = runner.invoke(
            main,
            [
                "docs",
                str(project_dir),
                "-t",
                TOKEN,
                "-n",
                "My Docs",
                "-d",
                "demo",
                "--doc_id",
                "abc123",
                "-o",
                str(output),
            ],
        )

        assert result.exit_code == 0, result.output
        args, kwargs = mock_generator.return_value.run.call_args
        assert args == (project_dir,)
        assert kwargs == {
            "doc_id": "abc123",
            "name": "My Docs",
            "subdomain": "demo",
            "output": output,
        }

    def test_doc_id_dash_alias(self, runner, mock_generator, project_dir):
        runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN, "--doc-id", "xyz"])

        assert mock_generator.return_value.run.call_args.kwargs["doc_id"] == "xyz"

    def test_defaults(self, runner, mock_generator, project_dir):
        runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN])

        assert mock_generator.return_value.run.call_args.kwargs == {
            "doc_id": None,
            "name": None,
            "subdomain": None,
            "output": None,
        }

    def test_folder_argument_required(self, runner, mock_generator):
        result = runner.invoke(main, ["docs", "-t", TOKEN])

        assert result.exit_code != 0
        assert "FOLDER" in result.output
        mock_generator.assert_not_called()


class TestErrors:
    def test_timeout_reported(self, runner, mock_generator, project_dir):
        mock_generator.return_value.run.side_effect = PollTimeoutError(
            "Timed out after 1800s waiting for overview generation of abc123",
            doc_id="abc123",
            stage="overview",
            elapsed=1800,
        )

        result = runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN])

        assert result.exit_code == 1
        assert "Error: Timed out after 1800s" in result.output

    def test_api_error_does_not_leak_token(self, runner, mock_generator, project_dir):
        from polyfact.api_client import PolyfactAPIError

        mock_generator.return_value.run.side_effect = PolyfactAPIError(
            f"POST /docs/references failed: 401 - invalid token {TOKEN}", status_code=401
        )

        result = runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN])

        assert result.exit_code == 1
        assert TOKEN not in result.output
        assert "401" in result.output

    def test_invalid_config_value(self, runner, mock_generator, project_dir, monkeypatch):
        monkeypatch.setenv("POLYFACT_POLL_TIMEOUT", "soon")

        result = runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN])

        assert result.exit_code == 1
        assert "poll_timeout" in result.output
        mock_generator.assert_not_called()


class TestEndToEnd:
    """Run the real pipeline against a mocked HTTP layer."""

    def test_full_run_with_deploy(
        self, runner, project_dir, mock_request, response_factory, monkeypatch
    ):
        monkeypatch.setenv("POLYFACT_PROGRESS_POLL_INTERVAL", "0")
        monkeypatch.setenv("POLYFACT_STATUS_POLL_INTERVAL", "0")

        def respond(method, url, **kwargs):
            path = url.removeprefix("https://api2.polyfact.com")
            if path == "/docs/references":
                return response_factory(json_data={"docs_id": "abc123"})
            if "/progress/" in path:
                return response_factory(json_data={"total": 2, "progress": 2, "status": "done"})
            if "/generate/" in path:
                return response_factory()
            if path == "/docs/abc123/deploy":
                return response_factory(json_data={"domain": "demo.polyfact.dev"})
            return response_factory(json_data={"status": "ok"})

        mock_request.side_effect = respond

        result = runner.invoke(main, ["docs", str(project_dir), "-t", TOKEN, "-d", "demo"])

        assert result.exit_code == 0, result.output
        paths = [c.args[1].removeprefix("https://api2.polyfact.com") for c in
                 mock_request.call_args_list]
        assert paths == [
            "/docs/references",
            "/docs/abc123/progress/references",
            "/docs/abc123/generate/folders",
            "/docs/abc123/progress/folders",
            "/docs/abc123/generate/structure",
            "/docs/abc123/structure",
            "/docs/abc123/generate/overview",
            "/docs/abc123/overview",
            "/docs/abc123/generate/getting-started",
            "/docs/abc123/getting-started",
            "/docs/abc123/deploy",
        ]
        assert mock_request.call_args.kwargs["json"] == {"name": "abc123", "subdomain": "demo"}
        assert 'deployed to "demo.polyfact.dev"' in result.output
