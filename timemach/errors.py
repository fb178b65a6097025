"""
Error types raised by data providers.

Every failure of the backend boundary is a ProviderError. The command
executor converts these into FetchFailed events, so none of them ever
reaches the Textual event loop as an unhandled exception.
"""

from __future__ import annotations


class ProviderError(Exception):
    """Base class for data provider failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ProviderInvocationError(ProviderError):
    """The backend could not be run or exited abnormally.

    Attributes:
        returncode: Exit status of the backend process, if it ran.
        stderr: Captured standard error, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class PayloadParseError(ProviderError):
    """The backend output could not be decoded into the expected shape."""
