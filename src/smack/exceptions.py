"""Exceptions raised by the Smack remote client and configuration store."""

from typing import Optional


class SmackError(Exception):
    """Base class for all Smack errors."""


class ConfigurationError(SmackError):
    """A remote server record cannot be used as given (bad base URL, duplicate id)."""


class RemoteRequestError(SmackError):
    """A call to a remote server did not produce a usable response."""


class RemoteConnectionError(RemoteRequestError):
    """The remote server could not be reached."""


class RemoteHttpError(RemoteRequestError):
    """The remote server answered with a non-success status code."""

    def __init__(self, status_code: int, reason: str = "", body: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        message = f"Response status code does not indicate success: {status_code}"
        if reason:
            message += f" ({reason})"
        super().__init__(message + ".")
