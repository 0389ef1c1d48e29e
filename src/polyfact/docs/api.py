"""REST bindings for the documentation-generation endpoints.

Every function takes the access token explicitly. The endpoint and request
timeout come from ``client`` when one is passed, otherwise from the global
configuration.
"""

import logging
from collections.abc import Callable
from typing import Any

from polyfact.api_client import PolyfactAPIError, PolyfactClient
from polyfact.docs.models import DeployResult, GetResult, ProgressSnapshot, Stage

logger = logging.getLogger(__name__)

# (doc_id, token) -> GetResult
GetFunction = Callable[[str, str], GetResult]


def _client(token: str, client: PolyfactClient | None) -> PolyfactClient:
    return client if client is not None else PolyfactClient(token=token)


def _expect_dict(payload: Any, path: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise PolyfactAPIError(f"Unexpected response from {path}: {payload!r}")
    return payload


def generate_references(
    folder_json: dict[str, Any], token: str, *, client: PolyfactClient | None = None
) -> str:
    """Upload a folder representation and start reference generation.

    Returns:
        The new document id

    Raises:
        PolyfactAPIError: If the call fails or no id is returned
    """
    path = "/docs/references"
    data = _expect_dict(_client(token, client).post(path, json={"folder": folder_json}), path)
    docs_id = data.get("docs_id")
    if not docs_id:
        raise PolyfactAPIError(f"No docs_id returned by {path}")

    logger.debug(f"Created document {docs_id}")
    return str(docs_id)


def generate(
    doc_id: str, stage: Stage, token: str, *, client: PolyfactClient | None = None
) -> None:
    """Trigger generation of one stage. The response body is ignored."""
    stage = Stage(stage)
    _client(token, client).post(f"/docs/{doc_id}/generate/{stage.value}")
    logger.debug(f"Triggered {stage.value} generation for {doc_id}")


def get_progress(
    doc_id: str, kind: Stage, token: str, *, client: PolyfactClient | None = None
) -> ProgressSnapshot:
    """Fetch the progress counters of a fractional stage.

    Raises:
        PolyfactAPIError: If the call fails or the payload is malformed
    """
    kind = Stage(kind)
    path = f"/docs/{doc_id}/progress/{kind.value}"
    data = _expect_dict(_client(token, client).get(path), path)
    try:
        return ProgressSnapshot.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise PolyfactAPIError(f"Malformed progress payload from {path}: {data!r}") from e


def _get_stage(doc_id: str, stage: Stage, token: str, client: PolyfactClient | None) -> GetResult:
    path = f"/docs/{doc_id}/{stage.value}"
    return GetResult.from_dict(_expect_dict(_client(token, client).get(path), path))


def get_structure(doc_id: str, token: str, *, client: PolyfactClient | None = None) -> GetResult:
    return _get_stage(doc_id, Stage.STRUCTURE, token, client)


def get_overview(doc_id: str, token: str, *, client: PolyfactClient | None = None) -> GetResult:
    return _get_stage(doc_id, Stage.OVERVIEW, token, client)


def get_getting_started(
    doc_id: str, token: str, *, client: PolyfactClient | None = None
) -> GetResult:
    return _get_stage(doc_id, Stage.GETTING_STARTED, token, client)


def deploy(
    doc_id: str,
    name: str,
    subdomain: str,
    token: str,
    *,
    client: PolyfactClient | None = None,
) -> DeployResult:
    """Publish generated docs to ``subdomain``.

    Raises:
        PolyfactAPIError: If the call fails or no domain is returned
    """
    path = f"/docs/{doc_id}/deploy"
    data = _expect_dict(
        _client(token, client).post(path, json={"name": name, "subdomain": subdomain}), path
    )
    domain = data.get("domain")
    if not domain:
        raise PolyfactAPIError(f"No domain returned by {path}")
    return DeployResult(domain=str(domain))
