"""
Database module for the Postboard backend
"""

from .connection import create_database_engine, create_session_factory, to_async_url
from .store import Collection, Document, DocumentStore, SortDirection

__all__ = [
    "Collection",
    "Document",
    "DocumentStore",
    "SortDirection",
    "create_database_engine",
    "create_session_factory",
    "to_async_url",
]
