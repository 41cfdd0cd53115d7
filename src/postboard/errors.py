"""Error taxonomy shared by the store adapter, resolvers and the query engine."""

from __future__ import annotations


class PostboardError(Exception):
    """Base class for all Postboard errors."""

    pass


class FieldError(PostboardError):
    """An error that is reported at the boundary of the field that raised it."""

    default_message = "Field resolution failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidIdentifier(FieldError):
    """A supplied id string is not a well-formed store identifier."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid identifier: {value!r}")


class Unauthenticated(FieldError):
    """A write was attempted without a resolved caller identity."""

    default_message = "User not logged in."


class StoreUnavailable(FieldError):
    """The document store could not be reached."""

    default_message = "Document store unavailable"
