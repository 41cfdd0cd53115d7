from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from ...database.store import Collection, SortDirection
from ...errors import StoreUnavailable, Unauthenticated
from ...logging import get_logger
from ..types.comment import to_comment
from ..types.post import to_post
from .result import Rejected, Resolved, ResolverResult, rejects_field_errors

if TYPE_CHECKING:
    from ..context import ResolverContext
    from ..types.comment import Comment
    from ..types.post import Post

logger = get_logger(__name__)

NEWEST_FIRST = [("created_at", SortDirection.DESCENDING)]
OLDEST_FIRST = [("created_at", SortDirection.ASCENDING)]


# Query resolvers
@rejects_field_errors
async def resolve_post_by_id(
    parent: Any, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[Post | None]:
    """Resolve a post by its ID; None if it does not exist."""
    document = await ctx.store.find_one(Collection.POSTS, args["id"])
    return Resolved(to_post(document) if document else None)


@rejects_field_errors
async def resolve_posts(
    parent: Any, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[list[Post]]:
    """Resolve all posts, newest first."""
    documents = await ctx.store.find(Collection.POSTS, {}, NEWEST_FIRST)
    return Resolved([to_post(document) for document in documents])


# Field resolvers
@rejects_field_errors
async def resolve_post_comments(
    post: Post, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[list[Comment]]:
    """Resolve the comments on a post, oldest first. Always a list."""
    documents = await ctx.store.find(Collection.COMMENTS, {"post_id": post.id}, OLDEST_FIRST)
    return Resolved([to_comment(document) for document in documents])


# Mutation resolvers
@rejects_field_errors
async def create_post(
    parent: Any, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[Post]:
    """
    Create a new post.

    The caller becomes the author; the creation time is assigned here.
    """
    if not ctx.auth.is_authenticated:
        logger.info("Rejected unauthenticated mutation", field="createPost")
        return Rejected(Unauthenticated())

    post_id = await ctx.store.insert_one(
        Collection.POSTS,
        {
            "author_id": ctx.auth.user_id,
            "title": args.get("title"),
            "content": args.get("content"),
            "created_at": datetime.now(UTC),
        },
    )

    document = await ctx.store.find_one(Collection.POSTS, post_id)
    if document is None:
        return Rejected(StoreUnavailable(f"Created post {post_id} could not be read back"))

    logger.info("Post created", post_id=post_id, author_id=ctx.auth.user_id)
    return Resolved(to_post(document))
