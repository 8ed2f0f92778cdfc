from __future__ import annotations

from typing import List, Optional


class PracticeFormError(Exception):
    pass


class GenerationError(PracticeFormError):
    """A form record could not be built from the value pools."""


class FixtureWriteError(PracticeFormError):
    """A generated record could not be written to the fixtures area."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class ElementNotFoundError(PracticeFormError):
    """A required element never reached the wanted state within the timeout."""

    def __init__(self, description: str, timeout_ms: int, reason: Optional[str] = None) -> None:
        message = f"{description} not found within {timeout_ms}ms"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.description = description
        self.timeout_ms = timeout_ms
        self.reason = reason


class FormSequenceError(PracticeFormError):
    pass


class UnexpectedPageError(PracticeFormError):
    def __init__(self, messages: List[str]) -> None:
        super().__init__("Unexpected in-page error(s): " + "; ".join(messages))
        self.messages = list(messages)
