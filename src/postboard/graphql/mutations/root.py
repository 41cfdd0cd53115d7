"""
Root GraphQL mutation definitions
"""

import strawberry

from ..resolvers import FieldKey, dispatch
from ..types.comment import Comment
from ..types.post import Post


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="createPost")
    async def create_post(
        self,
        info: strawberry.Info,
        title: str | None = None,
        content: str | None = None,
    ) -> Post | None:
        """Create a post authored by the caller."""
        return await dispatch(
            FieldKey.MUTATION_CREATE_POST, self, {"title": title, "content": content}, info
        )

    @strawberry.mutation(name="createComment")
    async def create_comment(
        self,
        info: strawberry.Info,
        post_id: strawberry.ID,
        content: str | None = None,
    ) -> Comment | None:
        """Create a comment on a post, authored by the caller."""
        return await dispatch(
            FieldKey.MUTATION_CREATE_COMMENT,
            self,
            {"post_id": post_id, "content": content},
            info,
        )
