"""Long-term memories: text stores the API can retrieve context from."""

import logging

from polyfact.api_client import PolyfactAPIError, PolyfactClient, resolve_client

logger = logging.getLogger(__name__)


def create_memory(*, client: PolyfactClient | None = None) -> str:
    """Create an empty memory and return its id."""
    data = resolve_client(client).post("/memory", json={})
    if not isinstance(data, dict) or not data.get("id"):
        raise PolyfactAPIError(f"Unexpected response from /memory: {data!r}")

    logger.debug(f"Created memory {data['id']}")
    return str(data["id"])


def update_memory(
    memory_id: str,
    input: str,
    max_token: int = 0,
    *,
    client: PolyfactClient | None = None,
) -> bool:
    """Add ``input`` to a memory.

    Args:
        memory_id: Memory id
        input: Text to store
        max_token: Split the text into chunks of this many tokens (0: server default)
        client: API client (default: built from configuration)

    Returns:
        Whether the server reported success
    """
    data = resolve_client(client).put(
        "/memory", json={"id": memory_id, "input": input, "max_token": max_token}
    )
    return bool(data.get("success", True)) if isinstance(data, dict) else True


def get_all_memories(*, client: PolyfactClient | None = None) -> list:
    """List the memories of the current user."""
    data = resolve_client(client).get("/memories")
    if not isinstance(data, dict) or not isinstance(data.get("memories"), list):
        raise PolyfactAPIError(f"Unexpected response from /memories: {data!r}")
    return data["memories"]
