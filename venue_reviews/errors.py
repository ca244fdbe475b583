"""Domain errors surfaced to API callers.

Every error carries the HTTP status the transport layer renders it with.
None of them are retried.
"""
from __future__ import annotations


class ReviewsError(Exception):
    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(ReviewsError):
    """Malformed or missing input. No state was changed."""

    status_code = 400


class NotFoundError(ReviewsError):
    """The referenced venue does not exist."""

    status_code = 404


class RateLimitError(ReviewsError):
    """The submitter already rated this venue inside the cooldown window."""

    status_code = 403


class PersistenceError(ReviewsError):
    """The venue store could not be read or written.

    The in-memory collection is not rolled back when a save fails, so it may
    be ahead of the file on disk until the next successful write.
    """

    status_code = 500
