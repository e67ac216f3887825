"""Exceptions raised by the signing layer."""

from __future__ import annotations


class InvalidCredentialError(ValueError):
    """Raised when an API key is not of the form ``<digits>-<word chars>``.

    The key itself is never stored on the exception; only its length is
    kept so the error can be logged without leaking the secret.
    """

    def __init__(self, message: str, api_key_length: int = 0) -> None:
        super().__init__(message)
        self.api_key_length = api_key_length


class MalformedCommandError(ValueError):
    """Raised when a signed command string cannot be parsed."""

    def __init__(self, message: str, command: str = "") -> None:
        super().__init__(message)
        self.command = command
