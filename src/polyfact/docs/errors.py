"""Exceptions raised by the documentation pipeline."""


class DocsGenerationError(Exception):
    """Documentation generation could not be completed."""

    pass


class FolderConversionError(DocsGenerationError):
    """The source folder could not be converted to its JSON representation."""

    pass


class PollTimeoutError(DocsGenerationError):
    """A stage did not complete within the configured wait budget."""

    def __init__(self, message: str, doc_id: str, stage: str, elapsed: float):
        super().__init__(message)
        self.doc_id = doc_id
        self.stage = stage
        self.elapsed = elapsed
