"""Exceptions raised by the domain and application layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for errors that map onto a structured failure response."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(DomainError):
    """A required field is missing or a value is outside its allowed set."""


class NotFoundError(DomainError):
    """An id-scoped operation referenced a record that does not exist."""


class StoreUnavailable(DomainError):
    """The backing store could not be reached or rejected the operation."""


class UpstreamError(DomainError):
    """An external collaborator failed to answer."""


__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "StoreUnavailable",
    "UpstreamError",
]
