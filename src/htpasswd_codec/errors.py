"""Custom exceptions for htpasswd file handling."""

from __future__ import annotations


class HtpasswdError(Exception):
    """Root of the store and CLI errors; ``exit_code`` is the CLI exit status."""

    def __init__(self, message: str, *, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code


class HtpasswdFileError(HtpasswdError):
    """Reading or writing an htpasswd file failed."""


class UserNotFoundError(HtpasswdError):
    """Requested user has no entry in the file."""


class InvalidFieldError(HtpasswdError):
    """Username or hash would not survive a parse/stringify round trip."""
