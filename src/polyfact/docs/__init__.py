"""Documentation generation: folder upload, stage polling and deployment."""

from polyfact.docs.errors import DocsGenerationError, FolderConversionError, PollTimeoutError
from polyfact.docs.generator import DocsGenerator
from polyfact.docs.models import DocsResult, GetResult, ProgressSnapshot, Stage

__all__ = [
    "DocsGenerationError",
    "DocsGenerator",
    "DocsResult",
    "FolderConversionError",
    "GetResult",
    "PollTimeoutError",
    "ProgressSnapshot",
    "Stage",
]
