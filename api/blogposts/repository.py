"""
Blog post persistence (raw SQL).

This is the only place that knows the `blog_posts` table and its column
names. Every statement is parameterized; no request value is ever formatted
into SQL text.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from core import db

from .entities import BlogPost

logger = logging.getLogger(__name__)

# `blog_posts.id` is int4; anything outside cannot match a row.
ID_MIN = -(2**31)
ID_MAX = 2**31 - 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS blog_posts (
    id            integer GENERATED BY DEFAULT AS IDENTITY PRIMARY KEY,
    title         varchar(200) NOT NULL,
    content       text NOT NULL,
    creation_date timestamptz NOT NULL
)
"""


def id_in_range(post_id: int) -> bool:
    return ID_MIN <= post_id <= ID_MAX


def row_to_entity(row: dict[str, Any]) -> BlogPost:
    """
    Map a `blog_posts` row onto the entity, field by field.
    """
    creation_date = row["creation_date"]
    if isinstance(creation_date, datetime) and creation_date.tzinfo is None:
        creation_date = creation_date.replace(tzinfo=timezone.utc)
    return BlogPost(
        id=int(row["id"]),
        title=str(row["title"]),
        content=str(row["content"]),
        creation_date=creation_date,
    )


class BlogPostDataStore:
    """
    CRUD access to the `blog_posts` table.

    Holds no state besides the database handle, so one instance can serve
    concurrent requests.
    """

    def __init__(self, database: db.Database) -> None:
        self.database = database

    async def ensure_schema(self) -> None:
        await self.database.execute(SCHEMA_SQL)
        logger.info("blog_posts_schema_ensured")

    async def select_all(self) -> list[BlogPost]:
        rows = await self.database.fetch_all(
            """
            SELECT id, title, content, creation_date
            FROM blog_posts
            ORDER BY id ASC
            """
        )
        return [row_to_entity(row) for row in rows]

    async def select_by_id(self, post_id: int) -> BlogPost | None:
        if not id_in_range(post_id):
            return None
        row = await self.database.fetch_one(
            """
            SELECT id, title, content, creation_date
            FROM blog_posts
            WHERE id = $1
            """,
            post_id,
        )
        return row_to_entity(row) if row is not None else None

    async def insert(self, *, title: str, content: str, creation_date: datetime) -> BlogPost:
        if creation_date.tzinfo is None:
            creation_date = creation_date.replace(tzinfo=timezone.utc)

        row = await self.database.fetch_one(
            """
            INSERT INTO blog_posts (title, content, creation_date)
            VALUES ($1, $2, $3)
            RETURNING id, title, content, creation_date
            """,
            title,
            content,
            creation_date,
        )
        if row is None:
            raise RuntimeError("Failed to insert blog post.")
        post = row_to_entity(row)
        logger.info("blog_post_created id=%s", post.id)
        return post

    async def update(self, post_id: int, *, title: str, content: str) -> BlogPost | None:
        """
        Change title and content only, in one statement.
        Returns the updated post, or None when no row has that id.
        """
        if not id_in_range(post_id):
            return None
        row = await self.database.fetch_one(
            """
            UPDATE blog_posts
            SET title = $2,
                content = $3
            WHERE id = $1
            RETURNING id, title, content, creation_date
            """,
            post_id,
            title,
            content,
        )
        logger.info("blog_post_updated id=%s affected=%s", post_id, 0 if row is None else 1)
        return row_to_entity(row) if row is not None else None

    async def delete(self, post_id: int) -> int:
        """
        Delete by id. Returns the number of rows affected; 0 is not an error.
        """
        if not id_in_range(post_id):
            return 0
        status = await self.database.execute(
            """
            DELETE FROM blog_posts
            WHERE id = $1
            """,
            post_id,
        )
        count = db.affected_rows(status)
        logger.info("blog_post_deleted id=%s affected=%s", post_id, count)
        return count
