"""
Error taxonomy shared by the session, feed and like components.

Every public coroutine in the core either returns its value or raises one of
the ``ImageFeedError`` subclasses below. ``MainContextViolation`` is the only
exception that signals a programming mistake rather than an operation outcome.
"""

from __future__ import annotations


class ImageFeedError(Exception):
    """Base class for every failure reported by the core."""


class NetworkError(ImageFeedError):
    """Raised when the remote call could not be completed successfully."""


class HTTPStatusCodeError(NetworkError):
    """The server answered with a status outside of ``[200, 300)``."""

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Unexpected HTTP status {status_code}.")
        self.status_code = status_code
        self.body = body


class RequestTransportError(NetworkError):
    """Connectivity or timeout failure raised by the HTTP transport."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(f"Transport failure: {cause!r}")
        self.cause = cause


class UnknownNetworkError(NetworkError):
    """The HTTP layer failed without a status code or a transport cause."""


class PayloadDecodeError(ImageFeedError):
    """The server was reached but the payload did not match the expected shape."""

    def __init__(self, target: str, detail: str = "") -> None:
        message = f"Could not decode response as {target}."
        if detail:
            message = f"{message} {detail}"
        super().__init__(message)
        self.target = target


class DuplicateCodeError(ImageFeedError):
    """An authorization code was submitted for exchange more than once."""


class MissingCredentialError(ImageFeedError):
    """An authorized call was attempted while no bearer token is stored."""


class CredentialStoreError(ImageFeedError):
    """The token store could not be read or written."""


class InvalidRequestError(ImageFeedError):
    """A request URL could not be built from the configured values."""


class OperationCancelledError(ImageFeedError):
    """The operation was superseded by a newer call of the same kind."""


class MainContextViolation(RuntimeError):
    """A main-context-only entry point was invoked from elsewhere."""


__all__ = [
    "CredentialStoreError",
    "DuplicateCodeError",
    "HTTPStatusCodeError",
    "ImageFeedError",
    "InvalidRequestError",
    "MainContextViolation",
    "MissingCredentialError",
    "NetworkError",
    "OperationCancelledError",
    "PayloadDecodeError",
    "RequestTransportError",
    "UnknownNetworkError",
]
