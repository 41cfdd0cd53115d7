"""
User GraphQL type definitions
"""

import strawberry


@strawberry.type
class User:
    """A caller identity. Users are projected from ids, never loaded from storage."""

    id: strawberry.ID


def to_user(user_id: str | None) -> User | None:
    """Project an identity id into a User, or None when there is no id."""
    if not user_id:
        return None
    return User(id=strawberry.ID(user_id))
