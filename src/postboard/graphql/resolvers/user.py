from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..types.user import to_user
from .result import Resolved, ResolverResult

if TYPE_CHECKING:
    from ..context import ResolverContext
    from ..types.comment import Comment
    from ..types.post import Post
    from ..types.user import User


async def resolve_current_user(
    parent: Any, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[User | None]:
    """The caller as a User, or None for anonymous requests."""
    return Resolved(to_user(ctx.auth.user_id))


async def resolve_post_author(
    post: Post, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[User | None]:
    return Resolved(to_user(post.author_id))


async def resolve_comment_author(
    comment: Comment, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[User | None]:
    return Resolved(to_user(comment.author_id))
