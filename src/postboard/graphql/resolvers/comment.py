from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from ...database.store import Collection
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


@rejects_field_errors
async def resolve_comment_by_id(
    parent: Any, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[Comment | None]:
    """Resolve a comment by its ID; None if it does not exist."""
    document = await ctx.store.find_one(Collection.COMMENTS, args["id"])
    return Resolved(to_comment(document) if document else None)


@rejects_field_errors
async def resolve_comment_post(
    comment: Comment, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[Post | None]:
    document = await ctx.store.find_one(Collection.POSTS, comment.post_id)
    return Resolved(to_post(document) if document else None)


@rejects_field_errors
async def create_comment(
    parent: Any, args: dict[str, Any], ctx: ResolverContext
) -> ResolverResult[Comment]:
    """
    Create a comment on a post.

    The post is not required to exist; only the id format is checked.
    """
    if not ctx.auth.is_authenticated:
        logger.info("Rejected unauthenticated mutation", field="createComment")
        return Rejected(Unauthenticated())

    comment_id = await ctx.store.insert_one(
        Collection.COMMENTS,
        {
            "post_id": args["post_id"],
            "author_id": ctx.auth.user_id,
            "content": args.get("content"),
            "created_at": datetime.now(UTC),
        },
    )

    document = await ctx.store.find_one(Collection.COMMENTS, comment_id)
    if document is None:
        return Rejected(StoreUnavailable(f"Created comment {comment_id} could not be read back"))

    logger.info(
        "Comment created",
        comment_id=comment_id,
        post_id=document["post_id"],
        author_id=ctx.auth.user_id,
    )
    return Resolved(to_comment(document))
