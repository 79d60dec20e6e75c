"""Exceptions shared by the intake and scoring contexts."""

from typing import Any


class InvalidInputError(ValueError):
    """
    Exception raised when data cannot be normalized because its root is not an object.

    Resume and score payloads tolerate any amount of missing or mistyped content
    inside a mapping, but a root that is None, a primitive, or an array has no
    sensible canonical form.

    Attributes:
        message: Error description
        received_type: Name of the type that was received at the root
    """

    def __init__(self, message: str, received: Any = None):
        self.message = message
        self.received_type = type(received).__name__
        super().__init__(f"{message} (got {self.received_type})")


class EmptyResponseError(RuntimeError):
    """Exception raised when the LLM provider returns no content at all."""

    pass
