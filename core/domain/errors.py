"""
Generation error taxonomy.

Empty recordings and suppressed duplicates are not errors: they surface as
warnings and log events. Only missing input and failed writes abort a run.
"""
from typing import Optional


class GenerationError(Exception):
    """Base class for errors that abort a generation run."""

    stage = "generate"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TicketFetchError(GenerationError):
    """The ticket source could not supply a story."""

    stage = "ticket-fetch"

    def __init__(self, key: str, reason: Optional[str] = None):
        message = f"Could not fetch ticket {key}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.key = key
        self.reason = reason


class ArtifactWriteError(GenerationError):
    """One of the three artifacts could not be persisted."""

    stage = "write"

    def __init__(self, artifact: str, path: str, reason: str):
        super().__init__(f"Failed to write {artifact} artifact to {path}: {reason}")
        self.artifact = artifact
        self.path = path
        self.reason = reason


class MissingInputError(GenerationError):
    """A required run input (recording text, feature name, story key) is absent."""

    stage = "parse"

    def __init__(self, field_name: str):
        super().__init__(f"Missing required input: {field_name}")
        self.field_name = field_name
