"""Typed resolver outcomes.

Resolvers return `Resolved` or `Rejected` instead of raising, so the outcome of
every field is an explicit value. `unwrap` turns a rejection back into the
exception the GraphQL executor records against the field's path.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from ...errors import FieldError

T = TypeVar("T")


@dataclass(frozen=True)
class Resolved(Generic[T]):
    value: T


@dataclass(frozen=True)
class Rejected:
    error: FieldError


ResolverResult = Union[Resolved[T], Rejected]


def unwrap(result: ResolverResult[T]) -> T:
    """Return the resolved value, or raise the rejection's error."""
    if isinstance(result, Rejected):
        raise result.error
    return result.value


def rejects_field_errors(
    resolver: Callable[..., Awaitable[ResolverResult[Any]]],
) -> Callable[..., Awaitable[ResolverResult[Any]]]:
    """Convert FieldErrors raised below a resolver (store, id parsing) into Rejected."""

    @functools.wraps(resolver)
    async def wrapper(*args: Any, **kwargs: Any) -> ResolverResult[Any]:
        try:
            return await resolver(*args, **kwargs)
        except FieldError as e:
            return Rejected(e)

    return wrapper
