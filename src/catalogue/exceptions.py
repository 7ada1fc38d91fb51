"""Errors raised by the catalogue service layer.

``ReviewValidationError`` is the only error this package tags itself: it is
a client fault and carries every field violation. Not-found failures come
straight from Protean; everything else the data layer or the notification
queue throws is wrapped so callers can tell server faults apart.
"""

from typing import NamedTuple

from protean.exceptions import ObjectNotFoundError, ValidationError

NotFoundError = ObjectNotFoundError


class FieldViolation(NamedTuple):
    field: str
    message: str


class ReviewValidationError(ValidationError):
    """A review submission failed one or more schema constraints."""

    bad_request = True

    @property
    def violations(self) -> list[FieldViolation]:
        return [FieldViolation(field, message) for field, messages in self.messages.items() for message in messages]


class PersistenceError(Exception):
    """A read or write against the catalogue store failed."""


class PublicationError(PersistenceError):
    """The notification queue did not accept a message."""


__all__ = [
    "FieldViolation",
    "NotFoundError",
    "PersistenceError",
    "PublicationError",
    "ReviewValidationError",
]
