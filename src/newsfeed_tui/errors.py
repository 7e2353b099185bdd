from __future__ import annotations


class FetchError(Exception):
    """Base class for failures loading the feed."""


class NetworkError(FetchError):
    """The request never completed."""


class ServerError(FetchError):
    def __init__(self, status: int):
        super().__init__(f"Server returned {status}")
        self.status = status


class InvalidResponseError(FetchError):
    """The response body could not be decoded as JSON."""


class MalformedDataWarning(UserWarning):
    """The feed envelope did not have the expected shape and was normalized."""


class StorageError(Exception):
    """A key-value store write that did not reach disk."""
