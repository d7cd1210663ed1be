"""
Blog post API schemas (request/response models).
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .entities import BlogPost

TITLE_MAX_LENGTH = 200


class BlogPostRequest(BaseModel):
    # id and creationDate are assigned by the server; anything extra is dropped.
    model_config = ConfigDict(extra="ignore")

    title: str = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH)
    content: str = Field(..., min_length=1)

    @field_validator("title", "content")
    @classmethod
    def _reject_unstorable(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        # Postgres text columns cannot store NUL.
        if "\x00" in value:
            raise ValueError("must not contain NUL characters")
        return value


class BlogPostResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    content: str
    creation_date: datetime = Field(..., alias="creationDate")

    @classmethod
    def from_entity(cls, post: BlogPost) -> BlogPostResponse:
        return cls(
            id=post.id,
            title=post.title,
            content=post.content,
            creation_date=post.creation_date,
        )
