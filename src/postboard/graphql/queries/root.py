"""
Root GraphQL query definitions
"""

import strawberry

from ..resolvers import FieldKey, dispatch
from ..types.comment import Comment
from ..types.post import Post
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        return await dispatch(FieldKey.QUERY_ME, self, {}, info)

    @strawberry.field
    async def post(self, info: strawberry.Info, id: strawberry.ID) -> Post | None:
        """Get a post by ID."""
        return await dispatch(FieldKey.QUERY_POST, self, {"id": id}, info)

    @strawberry.field
    async def posts(self, info: strawberry.Info) -> list[Post | None] | None:
        """Get all posts, newest first."""
        return await dispatch(FieldKey.QUERY_POSTS, self, {}, info)

    @strawberry.field
    async def comment(self, info: strawberry.Info, id: strawberry.ID) -> Comment | None:
        """Get a comment by ID."""
        return await dispatch(FieldKey.QUERY_COMMENT, self, {"id": id}, info)
