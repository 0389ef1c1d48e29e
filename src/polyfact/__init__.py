"""polyfact - documentation generation CLI and Polyfact API helpers.

The package root re-exports the SDK helpers:

    from polyfact import generate, generate_with_type, t, Chat
"""

__version__ = "0.1.0"

from polyfact.api_client import PolyfactAPIError, PolyfactClient
from polyfact.chats import Chat
from polyfact.generation import (
    GenerationOptions,
    GenerationResult,
    TokenUsage,
    generate,
    generate_with_token_usage,
)
from polyfact.memory import create_memory, get_all_memories, update_memory
from polyfact.probabilistic_helpers import (
    GenerationError,
    generate_with_type,
    generate_with_type_with_token_usage,
    t,
)
from polyfact.split import split_string
from polyfact.transcription import transcribe

__all__ = [
    "Chat",
    "GenerationError",
    "GenerationOptions",
    "GenerationResult",
    "PolyfactAPIError",
    "PolyfactClient",
    "TokenUsage",
    "__version__",
    "create_memory",
    "generate",
    "generate_with_token_usage",
    "generate_with_type",
    "generate_with_type_with_token_usage",
    "get_all_memories",
    "split_string",
    "t",
    "transcribe",
    "update_memory",
]
