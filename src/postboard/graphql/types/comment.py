"""
Comment GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated, Any

import strawberry

from .user import User

if TYPE_CHECKING:
    from .post import Post


@strawberry.type
class Comment:
    """Comment type for GraphQL API."""

    id: strawberry.ID
    post_id: strawberry.ID
    author_id: strawberry.ID | None
    content: str | None
    created_at: datetime

    @strawberry.field
    async def author(self, info: strawberry.Info) -> User | None:
        """Get the author of this comment, if it has one."""
        from ..resolvers import FieldKey, dispatch

        return await dispatch(FieldKey.COMMENT_AUTHOR, self, {}, info)

    @strawberry.field
    async def post(
        self, info: strawberry.Info
    ) -> Annotated["Post", strawberry.lazy(".post")] | None:  # noqa: E501
        """Get the post this comment belongs to."""
        from ..resolvers import FieldKey, dispatch

        return await dispatch(FieldKey.COMMENT_POST, self, {}, info)


def to_comment(document: dict[str, Any]) -> Comment:
    """Convert a stored comment document to its GraphQL type."""
    author_id = document.get("author_id")
    return Comment(
        id=strawberry.ID(document["id"]),
        post_id=strawberry.ID(document["post_id"]),
        author_id=strawberry.ID(author_id) if author_id is not None else None,
        content=document.get("content"),
        created_at=document["created_at"],
    )
