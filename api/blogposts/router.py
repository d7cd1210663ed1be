"""
Blog post API endpoints.

Routes only translate HTTP into data store calls and entities into response
DTOs; there is no business logic here.
"""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Response, status

from . import schemas
from .dependencies import get_data_store
from .repository import BlogPostDataStore

router = APIRouter()


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _not_found(post_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Blog post {post_id} not found.",
    )


@router.get("/blogpost", response_model=list[schemas.BlogPostResponse])
async def list_blog_posts(
    store: BlogPostDataStore = Depends(get_data_store),
) -> list[schemas.BlogPostResponse]:
    posts = await store.select_all()
    return [schemas.BlogPostResponse.from_entity(post) for post in posts]


@router.get("/blogpost/{post_id}", response_model=schemas.BlogPostResponse)
async def get_blog_post(
    post_id: int,
    store: BlogPostDataStore = Depends(get_data_store),
) -> schemas.BlogPostResponse:
    post = await store.select_by_id(post_id)
    if post is None:
        raise _not_found(post_id)
    return schemas.BlogPostResponse.from_entity(post)


@router.post(
    "/blogpost",
    response_model=schemas.BlogPostResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_blog_post(
    payload: schemas.BlogPostRequest,
    response: Response,
    store: BlogPostDataStore = Depends(get_data_store),
) -> schemas.BlogPostResponse:
    post = await store.insert(
        title=payload.title,
        content=payload.content,
        creation_date=_utc_now(),
    )
    response.headers["Location"] = f"/blogpost/{post.id}"
    return schemas.BlogPostResponse.from_entity(post)


@router.put("/blogpost/{post_id}", response_model=schemas.BlogPostResponse)
async def update_blog_post(
    post_id: int,
    payload: schemas.BlogPostRequest,
    store: BlogPostDataStore = Depends(get_data_store),
) -> schemas.BlogPostResponse:
    post = await store.update(post_id, title=payload.title, content=payload.content)
    if post is None:
        raise _not_found(post_id)
    return schemas.BlogPostResponse.from_entity(post)


@router.delete("/blogpost/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_blog_post(
    post_id: int,
    store: BlogPostDataStore = Depends(get_data_store),
) -> Response:
    # Idempotent: deleting a missing post is still a success.
    await store.delete(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
