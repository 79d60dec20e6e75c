"""Custom exceptions for the scoring context."""

from typing import Optional


class AtsScoringError(Exception):
    """
    Exception raised when an ATS score cannot be recovered from the model response.

    Attributes:
        message: Error description
        response_snippet: Start of the model response that failed to parse
    """

    def __init__(self, message: str, response_snippet: Optional[str] = None):
        self.message = message
        self.response_snippet = response_snippet

        parts = [message]
        if response_snippet:
            snippet = response_snippet[:200] + "..." if len(response_snippet) > 200 else response_snippet
            parts.append(f"\nResponse:\n{snippet}")

        super().__init__("\n".join(parts))
