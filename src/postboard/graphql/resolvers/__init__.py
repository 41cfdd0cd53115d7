"""Resolver dispatch table for the GraphQL schema.

Every schema field that computes a value is routed through `dispatch`, which
looks the field up in `RESOLVERS` (built once at import time), runs the
resolver with `(parent, args, context)` and unwraps its typed result.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from . import comment, post, user
from .result import ResolverResult, unwrap

if TYPE_CHECKING:
    import strawberry

    from ..context import ResolverContext

Resolver = Callable[[Any, dict[str, Any], "ResolverContext"], Awaitable[ResolverResult[Any]]]


class FieldKey(Enum):
    """One member per (type, field) pair with a resolver."""

    QUERY_ME = ("Query", "me")
    QUERY_POST = ("Query", "post")
    QUERY_POSTS = ("Query", "posts")
    QUERY_COMMENT = ("Query", "comment")
    POST_AUTHOR = ("Post", "author")
    POST_COMMENTS = ("Post", "comments")
    COMMENT_AUTHOR = ("Comment", "author")
    COMMENT_POST = ("Comment", "post")
    MUTATION_CREATE_POST = ("Mutation", "createPost")
    MUTATION_CREATE_COMMENT = ("Mutation", "createComment")

    @property
    def type_name(self) -> str:
        return self.value[0]

    @property
    def field_name(self) -> str:
        return self.value[1]


RESOLVERS: Mapping[FieldKey, Resolver] = MappingProxyType(
    {
        FieldKey.QUERY_ME: user.resolve_current_user,
        FieldKey.QUERY_POST: post.resolve_post_by_id,
        FieldKey.QUERY_POSTS: post.resolve_posts,
        FieldKey.QUERY_COMMENT: comment.resolve_comment_by_id,
        FieldKey.POST_AUTHOR: user.resolve_post_author,
        FieldKey.POST_COMMENTS: post.resolve_post_comments,
        FieldKey.COMMENT_AUTHOR: user.resolve_comment_author,
        FieldKey.COMMENT_POST: comment.resolve_comment_post,
        FieldKey.MUTATION_CREATE_POST: post.create_post,
        FieldKey.MUTATION_CREATE_COMMENT: comment.create_comment,
    }
)


def validate_resolver_table() -> None:
    """Fail fast if any field key has no resolver."""
    missing = [key.value for key in FieldKey if key not in RESOLVERS]
    if missing:
        raise RuntimeError(f"Fields without resolvers: {missing}")


async def dispatch(key: FieldKey, parent: Any, args: dict[str, Any], info: strawberry.Info) -> Any:
    """Resolve one field and return its value, raising the field's error on rejection."""
    from ..context import get_resolver_context

    result = await RESOLVERS[key](parent, args, get_resolver_context(info))
    return unwrap(result)


__all__ = ["FieldKey", "RESOLVERS", "dispatch", "validate_resolver_table"]
