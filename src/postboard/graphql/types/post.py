"""
Post GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Any

import strawberry

from .user import User

if TYPE_CHECKING:
    from .comment import Comment


@strawberry.type
class Post:
    """Post type for GraphQL API."""

    id: strawberry.ID
    author_id: strawberry.ID
    title: str | None
    content: str | None
    created_at: datetime

    @strawberry.field
    async def author(self, info: strawberry.Info) -> User | None:
        """Get the author of this post."""
        from ..resolvers import FieldKey, dispatch

        return await dispatch(FieldKey.POST_AUTHOR, self, {}, info)

    @strawberry.field
    async def comments(
        self, info: strawberry.Info
    ) -> list[Annotated["Comment", strawberry.lazy(".comment")] | None]:
        """Get the comments on this post, oldest first."""
        from ..resolvers import FieldKey, dispatch

        return await dispatch(FieldKey.POST_COMMENTS, self, {}, info)


def to_post(document: dict[str, Any]) -> Post:
    """Convert a stored post document to its GraphQL type."""
    return Post(
        id=strawberry.ID(document["id"]),
        author_id=strawberry.ID(document["author_id"]),
        title=document.get("title"),
        content=document.get("content"),
        created_at=document["created_at"],
    )
