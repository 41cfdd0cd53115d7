"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import sys
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio

# Add src directory to path so imports work without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from postboard.auth.adapters.jwt import JWTAuthAdapter  # noqa: E402
from postboard.database.store import DocumentStore  # noqa: E402
from postboard.graphql.engine import QueryEngine  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture(scope="function")
def database_url(tmp_path: Path) -> str:
    """A SQLite database file private to the test."""
    return f"sqlite:///{tmp_path / 'postboard.db'}"


@pytest_asyncio.fixture(scope="function")
async def store(database_url: str) -> AsyncGenerator[DocumentStore, None]:
    """Provide a document store with the collections created."""
    document_store = DocumentStore.from_url(database_url)
    await document_store.create_schema()
    yield document_store
    await document_store.close()


@pytest.fixture(scope="function")
def query_engine(store: DocumentStore) -> QueryEngine:
    return QueryEngine(store)


@pytest.fixture(scope="function")
def jwt_adapter() -> JWTAuthAdapter:
    return JWTAuthAdapter(
        secret_key=TEST_JWT_SECRET,
        algorithm="HS256",
        issuer="test-postboard",
        audience="test-api",
    )


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
