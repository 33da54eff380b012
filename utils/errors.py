# utils/errors.py
from typing import Optional


class ChatServiceError(Exception):
    """Base class for errors that end a request with {success: false, error}."""

    status_code = 500


class InvalidRequest(ChatServiceError):
    status_code = 400


class NotFound(ChatServiceError):
    status_code = 404


class StorageError(ChatServiceError):
    """Reading from MongoDB failed."""


class PersistenceError(StorageError):
    """Writing to MongoDB failed."""


class UpstreamError(ChatServiceError):
    """The completion gateway failed or answered with something unusable."""

    status_code = 502

    def __init__(self, message: str, upstream_status: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.body = body
