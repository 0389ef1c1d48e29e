"""Helpers built on top of plain text generation."""

from polyfact.probabilistic_helpers import type_helpers as t
from polyfact.probabilistic_helpers.generate_with_type import (
    GenerationError,
    TypedGenerationResult,
    generate_with_type,
    generate_with_type_with_token_usage,
)

__all__ = [
    "GenerationError",
    "TypedGenerationResult",
    "generate_with_type",
    "generate_with_type_with_token_usage",
    "t",
]
