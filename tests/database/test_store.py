"""
Tests for the document store adapter against a SQLite database.
"""

import uuid
from datetime import UTC, datetime, timedelta

import pytest

from postboard.database.store import (
    Collection,
    DocumentStore,
    SortDirection,
    to_native_id,
    to_wire_id,
)
from postboard.errors import InvalidIdentifier, StoreUnavailable

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=UTC)


def post_document(author_id: str = "u1", minutes: int = 0, title: str = "T") -> dict:
    return {
        "author_id": author_id,
        "title": title,
        "content": "C",
        "created_at": BASE_TIME + timedelta(minutes=minutes),
    }


class TestIdentifierConversion:
    """Wire <-> native identifier conversion."""

    def test_parses_canonical_string(self):
        value = uuid.uuid4()
        assert to_native_id(str(value)) == value

    def test_passes_native_through(self):
        value = uuid.uuid4()
        assert to_native_id(value) is value

    def test_wire_form_is_canonical(self):
        value = uuid.uuid4()
        assert to_wire_id(to_native_id(str(value).upper())) == str(value)

    @pytest.mark.parametrize("bad", ["", "not-an-id", "1234", None, 42])
    def test_rejects_malformed(self, bad):
        with pytest.raises(InvalidIdentifier):
            to_native_id(bad)


class TestFindOne:
    @pytest.mark.asyncio
    async def test_missing_document_is_none(self, store: DocumentStore):
        assert await store.find_one(Collection.POSTS, str(uuid.uuid4())) is None

    @pytest.mark.asyncio
    async def test_invalid_identifier(self, store: DocumentStore):
        with pytest.raises(InvalidIdentifier, match="not-an-id"):
            await store.find_one(Collection.POSTS, "not-an-id")

    @pytest.mark.asyncio
    async def test_read_after_write(self, store: DocumentStore):
        post_id = await store.insert_one(Collection.POSTS, post_document())

        document = await store.find_one(Collection.POSTS, post_id)

        assert document is not None
        assert document["id"] == post_id
        assert document["author_id"] == "u1"
        assert document["title"] == "T"
        assert document["content"] == "C"

    @pytest.mark.asyncio
    async def test_identifiers_are_strings(self, store: DocumentStore):
        post_id = await store.insert_one(Collection.POSTS, post_document())
        comment_id = await store.insert_one(
            Collection.COMMENTS,
            {"post_id": post_id, "author_id": None, "content": "hi", "created_at": BASE_TIME},
        )

        comment = await store.find_one(Collection.COMMENTS, comment_id)

        assert comment == {
            "id": comment_id,
            "post_id": post_id,
            "author_id": None,
            "content": "hi",
            "created_at": comment["created_at"],
        }
        assert isinstance(comment["post_id"], str)


class TestInsertOne:
    @pytest.mark.asyncio
    async def test_generates_identifier(self, store: DocumentStore):
        first = await store.insert_one(Collection.POSTS, post_document())
        second = await store.insert_one(Collection.POSTS, post_document())

        assert first != second
        assert to_wire_id(to_native_id(first)) == first

    @pytest.mark.asyncio
    async def test_rejects_malformed_reference(self, store: DocumentStore):
        with pytest.raises(InvalidIdentifier):
            await store.insert_one(
                Collection.COMMENTS,
                {"post_id": "nope", "content": "hi", "created_at": BASE_TIME},
            )
        assert await store.count(Collection.COMMENTS) == 0

    @pytest.mark.asyncio
    async def test_rejects_unknown_field(self, store: DocumentStore):
        with pytest.raises(ValueError, match="Unknown field 'colour'"):
            await store.insert_one(Collection.POSTS, {**post_document(), "colour": "red"})


class TestFind:
    @pytest.mark.asyncio
    async def test_sorts_descending(self, store: DocumentStore):
        for minutes, title in [(5, "middle"), (1, "oldest"), (9, "newest")]:
            await store.insert_one(Collection.POSTS, post_document(minutes=minutes, title=title))

        documents = await store.find(
            Collection.POSTS, {}, [("created_at", SortDirection.DESCENDING)]
        )

        assert [d["title"] for d in documents] == ["newest", "middle", "oldest"]

    @pytest.mark.asyncio
    async def test_filters_by_reference_and_sorts_ascending(self, store: DocumentStore):
        post_id = await store.insert_one(Collection.POSTS, post_document())
        other_id = await store.insert_one(Collection.POSTS, post_document())
        for minutes, content in [(3, "second"), (1, "first"), (7, "third")]:
            await store.insert_one(
                Collection.COMMENTS,
                {
                    "post_id": post_id,
                    "author_id": "u2",
                    "content": content,
                    "created_at": BASE_TIME + timedelta(minutes=minutes),
                },
            )
        await store.insert_one(
            Collection.COMMENTS,
            {"post_id": other_id, "content": "elsewhere", "created_at": BASE_TIME},
        )

        documents = await store.find(
            Collection.COMMENTS,
            {"post_id": post_id},
            [("created_at", SortDirection.ASCENDING)],
        )

        assert [d["content"] for d in documents] == ["first", "second", "third"]
        assert all(d["post_id"] == post_id for d in documents)

    @pytest.mark.asyncio
    async def test_no_matches_is_empty(self, store: DocumentStore):
        assert await store.find(Collection.COMMENTS, {"post_id": str(uuid.uuid4())}) == []

    @pytest.mark.asyncio
    async def test_invalid_identifier_in_filter(self, store: DocumentStore):
        with pytest.raises(InvalidIdentifier):
            await store.find(Collection.COMMENTS, {"post_id": "bogus"})

    @pytest.mark.asyncio
    async def test_unknown_sort_key(self, store: DocumentStore):
        with pytest.raises(ValueError, match="Unknown field"):
            await store.find(Collection.POSTS, {}, [("score", SortDirection.ASCENDING)])


class TestAvailability:
    @pytest.mark.asyncio
    async def test_ping_ok(self, store: DocumentStore):
        assert await store.ping() == (True, None)

    @pytest.mark.asyncio
    async def test_unreachable_store(self, tmp_path):
        missing = tmp_path / "missing-dir" / "postboard.db"
        unreachable = DocumentStore.from_url(f"sqlite:///{missing}")
        try:
            ok, error = await unreachable.ping()
            assert ok is False
            assert error

            with pytest.raises(StoreUnavailable):
                await unreachable.find_one(Collection.POSTS, str(uuid.uuid4()))
        finally:
            await unreachable.close()
