"""
Domain errors raised by operation handlers.

Every error carries a human-readable message that the HTTP shell surfaces
verbatim to the caller.
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for invariant violations detected by the core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DuplicateIdError(DomainError):
    """An entity with the requested id already exists."""


class NotFoundError(DomainError):
    """The referenced entity does not exist."""


class InvalidStateError(DomainError):
    """The entity is not in a state that allows the requested change."""


class AlreadyPaidError(InvalidStateError):
    """A paid invoice cannot be cancelled."""


class InvalidPayloadError(DomainError):
    """The operation payload failed validation."""


class UnknownOperationError(DomainError):
    """No handler is registered for the operation name."""
