"""Audio transcription with the Polyfact API."""

import logging
from pathlib import Path
from typing import BinaryIO

from polyfact.api_client import PolyfactAPIError, PolyfactClient, resolve_client

logger = logging.getLogger(__name__)


def transcribe(
    file: str | Path | bytes | BinaryIO,
    *,
    client: PolyfactClient | None = None,
) -> str:
    """Transcribe an audio file.

    Args:
        file: Path to an audio file, its raw bytes, or an open binary stream
        client: API client (default: built from configuration)

    Returns:
        The transcribed text

    Raises:
        FileNotFoundError: If a path is given and does not exist
        PolyfactAPIError: If the request fails
    """
    api = resolve_client(client)

    if isinstance(file, str | Path):
        path = Path(file).expanduser()
        with open(path, "rb") as f:
            data = api.post("/transcribe", files={"file": (path.name, f)})
    elif isinstance(file, bytes):
        data = api.post("/transcribe", files={"file": ("audio", file)})
    else:
        data = api.post("/transcribe", files={"file": file})

    if not isinstance(data, dict) or "text" not in data:
        raise PolyfactAPIError(f"Unexpected response from /transcribe: {data!r}")

    logger.debug(f"Transcribed {len(data['text'])} characters")
    return str(data["text"])
