"""
Blog post dependencies for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Request

from core import db
from core.errors import StorageUnavailable

from .repository import BlogPostDataStore


def get_database(request: Request) -> db.Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise StorageUnavailable("Database is not configured for this app.")
    return database


def get_data_store(request: Request) -> BlogPostDataStore:
    return BlogPostDataStore(get_database(request))
