"""Tests for the documentation REST bindings."""

import pytest

from polyfact.api_client import PolyfactAPIError, PolyfactClient
from polyfact.docs import api
from polyfact.docs.models import DeployResult, ProgressSnapshot, Stage

BASE = "https://api2.polyfact.com"
TOKEN = "pk_test_token_123"  # noqa: S105 - test value


def called_url(mock_request):
    method, url = mock_request.call_args.args
    return method, url


class TestGenerateReferences:
    def test_uploads_folder_and_returns_docs_id(self, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data={"docs_id": "abc123"})
        folder = {"type": "folder", "name": "project", "content": []}

        doc_id = api.generate_references(folder, TOKEN)

        assert doc_id == "abc123"
        assert called_url(mock_request) == ("POST", f"{BASE}/docs/references")
        assert mock_request.call_args.kwargs["json"] == {"folder": folder}
        assert mock_request.call_args.kwargs["headers"] == {"X-Access-Token": TOKEN}

    def test_missing_docs_id(self, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data={})

        with pytest.raises(PolyfactAPIError, match="docs_id"):
            api.generate_references({}, TOKEN)


class TestGenerate:
    def test_triggers_stage(self, mock_request, response_factory):
        mock_request.return_value = response_factory()

        api.generate("abc123", Stage.GETTING_STARTED, TOKEN)

        assert called_url(mock_request) == (
            "POST",
            f"{BASE}/docs/abc123/generate/getting-started",
        )

    def test_accepts_stage_name(self, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data={"ok": True})

        api.generate("abc123", "folders", TOKEN)

        assert called_url(mock_request) == ("POST", f"{BASE}/docs/abc123/generate/folders")

    def test_uses_given_client(self, mock_request, response_factory):
        mock_request.return_value = response_factory()
        client = PolyfactClient(token=TOKEN, endpoint="https://staging.example", timeout=4)

        api.generate("abc123", Stage.OVERVIEW, TOKEN, client=client)

        assert called_url(mock_request) == (
            "POST",
            "https://staging.example/docs/abc123/generate/overview",
        )
        assert mock_request.call_args.kwargs["timeout"] == 4

    def test_unknown_stage(self, mock_request):
        with pytest.raises(ValueError):
            api.generate("abc123", "changelog", TOKEN)

        mock_request.assert_not_called()

    def test_server_error(self, mock_request, response_factory):
        mock_request.return_value = response_factory(
            status_code=500, json_data={"message": "Internal error"}
        )

        with pytest.raises(PolyfactAPIError) as exc_info:
            api.generate("abc123", Stage.FOLDERS, TOKEN)

        assert exc_info.value.status_code == 500
        assert "Internal error" in str(exc_info.value)


class TestGetProgress:
    def test_parses_snapshot(self, mock_request, response_factory):
        mock_request.return_value = response_factory(
            json_data={
                "total": 12,
                "progress": 3,
                "percentage": 0.25,
                "last_updated": 1700000000,
                "status": "running",
            }
        )

        result = api.get_progress("abc123", Stage.REFERENCES, TOKEN)

        assert result == ProgressSnapshot(
            total=12, progress=3, percentage=0.25, last_updated=1700000000, status="running"
        )
        assert called_url(mock_request) == ("GET", f"{BASE}/docs/abc123/progress/references")

    def test_malformed_payload(self, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data={"status": "waiting"})

        with pytest.raises(PolyfactAPIError, match="Malformed progress payload"):
            api.get_progress("abc123", Stage.FOLDERS, TOKEN)


class TestStatusGetters:
    @pytest.mark.parametrize(
        "getter,path",
        [
            (api.get_structure, "structure"),
            (api.get_overview, "overview"),
            (api.get_getting_started, "getting-started"),
        ],
    )
    def test_getter_path_and_status(self, getter, path, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data={"status": "ok", "md": "# Docs"})

        result = getter("abc123", TOKEN)

        assert result.status == "ok"
        assert result.is_complete is True
        assert result.data["md"] == "# Docs"
        assert called_url(mock_request) == ("GET", f"{BASE}/docs/abc123/{path}")

    def test_non_object_payload(self, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data=["not", "a", "dict"])

        with pytest.raises(PolyfactAPIError, match="Unexpected response"):
            api.get_overview("abc123", TOKEN)


class TestDeploy:
    def test_deploys_and_returns_domain(self, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data={"domain": "demo.polyfact.dev"})

        result = api.deploy("abc123", "My Docs", "demo", TOKEN)

        assert result == DeployResult(domain="demo.polyfact.dev")
        assert called_url(mock_request) == ("POST", f"{BASE}/docs/abc123/deploy")
        assert mock_request.call_args.kwargs["json"] == {"name": "My Docs", "subdomain": "demo"}

    def test_missing_domain(self, mock_request, response_factory):
        mock_request.return_value = response_factory(json_data={"status": "queued"})

        with pytest.raises(PolyfactAPIError, match="domain"):
            api.deploy("abc123", "abc123", "demo", TOKEN)
