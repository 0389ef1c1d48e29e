"""Text generation with the Polyfact API.

Example:
    >>> from polyfact import generate
    >>> generate("Write a haiku about the sea")  # doctest: +SKIP
"""

import logging
from dataclasses import dataclass
from typing import Any

from polyfact.api_client import PolyfactAPIError, PolyfactClient, resolve_client

logger = logging.getLogger(__name__)


@dataclass
class GenerationOptions:
    """Optional parameters of a generation request.

    Attributes:
        memory_id: Memory to retrieve context from
        chat_id: Chat the task belongs to (history is used as context)
        stop: Stop sequences
        provider: Model provider ("openai", "cohere", ...)
    """

    memory_id: str | None = None
    chat_id: str | None = None
    stop: list[str] | None = None
    provider: str | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        if self.memory_id:
            payload["memory_id"] = self.memory_id
        if self.chat_id:
            payload["chat_id"] = self.chat_id
        if self.stop:
            payload["stop"] = list(self.stop)
        if self.provider:
            payload["provider"] = self.provider
        return payload


@dataclass
class TokenUsage:
    """Tokens consumed by one or more generations."""

    input: int = 0
    output: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(input=self.input + other.input, output=self.output + other.output)


@dataclass
class GenerationResult:
    result: str
    token_usage: TokenUsage


def generate_with_token_usage(
    task: str,
    options: GenerationOptions | None = None,
    *,
    client: PolyfactClient | None = None,
) -> GenerationResult:
    """Generate a completion for ``task`` and report token usage.

    Args:
        task: Prompt
        options: Generation options
        client: API client (default: built from configuration)

    Returns:
        GenerationResult with the text and the token usage

    Raises:
        PolyfactAPIError: If the request fails or the response has no result
    """
    payload = {"task": task, **(options or GenerationOptions()).to_payload()}
    data = resolve_client(client).post("/generate", json=payload)

    if not isinstance(data, dict) or "result" not in data:
        raise PolyfactAPIError(f"Unexpected response from /generate: {data!r}")

    usage = data.get("token_usage") or {}
    token_usage = TokenUsage(input=int(usage.get("input", 0)), output=int(usage.get("output", 0)))
    logger.debug(f"Generated {token_usage.output} tokens from {token_usage.input} input tokens")

    return GenerationResult(result=str(data["result"]), token_usage=token_usage)


def generate(
    task: str,
    options: GenerationOptions | None = None,
    *,
    client: PolyfactClient | None = None,
) -> str:
    """Generate a completion for ``task``."""
    return generate_with_token_usage(task, options, client=client).result
