"""Generation constrained to a type.

The task is sent with the JSON schema of the requested type. The answer is
validated with pydantic; invalid answers are regenerated up to
MAX_ATTEMPTS times.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from polyfact.api_client import PolyfactClient
from polyfact.generation import GenerationOptions, TokenUsage, generate_with_token_usage

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_ATTEMPTS = 5

_FENCE_PATTERN = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


class GenerationError(Exception):
    """The model did not produce a valid answer."""

    pass


@dataclass
class TypedGenerationResult(Generic[T]):
    result: T
    token_usage: TokenUsage


def build_typed_task(task: str, adapter: TypeAdapter) -> str:
    schema = json.dumps(adapter.json_schema())
    return (
        f"{task}\n\n"
        f"Your answer must be valid JSON matching this JSON schema:\n{schema}\n"
        "Only answer with the JSON, without any text before or after it."
    )


def extract_json(text: str) -> str:
    """Strip whitespace and a surrounding markdown code fence."""
    text = text.strip()
    match = _FENCE_PATTERN.match(text)
    return match.group(1) if match else text


def generate_with_type_with_token_usage(
    task: str,
    type_: type[T] | Any,
    options: GenerationOptions | None = None,
    *,
    client: PolyfactClient | None = None,
    max_attempts: int = MAX_ATTEMPTS,
) -> TypedGenerationResult[T]:
    """Generate a value of ``type_`` for ``task``.

    Args:
        task: Prompt
        type_: A pydantic model or any type pydantic can validate (see polyfact.t)
        options: Generation options
        client: API client (default: built from configuration)
        max_attempts: Generations to try before giving up

    Returns:
        TypedGenerationResult with the validated value and the token usage of
        every attempt

    Raises:
        GenerationError: If no attempt produced a valid value
        PolyfactAPIError: If a request fails
    """
    adapter: TypeAdapter = TypeAdapter(type_)
    typed_task = build_typed_task(task, adapter)
    usage = TokenUsage()
    last_error: ValidationError | None = None

    for attempt in range(1, max_attempts + 1):
        generation = generate_with_token_usage(typed_task, options, client=client)
        usage = usage + generation.token_usage

        try:
            value = adapter.validate_json(extract_json(generation.result))
            return TypedGenerationResult(result=value, token_usage=usage)
        except ValidationError as e:
            last_error = e
            logger.warning(
                f"Generated value did not match the type (attempt {attempt}/{max_attempts}): "
                f"{e.error_count()} error(s)"
            )

    raise GenerationError(
        f"No valid answer after {max_attempts} attempts. Last error: {last_error}"
    )


def generate_with_type(
    task: str,
    type_: type[T] | Any,
    options: GenerationOptions | None = None,
    *,
    client: PolyfactClient | None = None,
) -> T:
    """Generate a value of ``type_`` for ``task`` (see generate_with_type_with_token_usage)."""
    return generate_with_type_with_token_usage(task, type_, options, client=client).result
