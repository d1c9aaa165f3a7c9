"""Blog API routers: public reading plus admin CRUD."""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kasupe.api.deps import get_current_admin, get_db
from kasupe.models.blog_post import BlogPost
from kasupe.schemas.common import MessageResponse
from kasupe.schemas.content import BlogPostCreate, BlogPostResponse, BlogPostUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/blogs", tags=["blogs"])
admin_router = APIRouter(
    prefix="/api/v1/admin/blogs",
    tags=["admin-blogs"],
    dependencies=[Depends(get_current_admin)],
)


async def _get_post_or_404(post_id: uuid.UUID, db: AsyncSession) -> BlogPost:
    result = await db.execute(select(BlogPost).where(BlogPost.id == post_id))
    post = result.scalar_one_or_none()
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found",
        )
    return post


async def _all_posts(db: AsyncSession) -> list[BlogPost]:
    result = await db.execute(select(BlogPost).order_by(BlogPost.created_at.desc()))
    return list(result.scalars().all())


@router.get("", response_model=list[BlogPostResponse], summary="List blog posts")
async def list_posts(db: AsyncSession = Depends(get_db)) -> list[BlogPost]:
    return await _all_posts(db)


@router.get("/{post_id}", response_model=BlogPostResponse, summary="Get a blog post")
async def get_post(post_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> BlogPost:
    return await _get_post_or_404(post_id, db)


@admin_router.get("", response_model=list[BlogPostResponse], summary="List blog posts (admin)")
async def admin_list_posts(db: AsyncSession = Depends(get_db)) -> list[BlogPost]:
    return await _all_posts(db)


@admin_router.post(
    "",
    response_model=BlogPostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish a blog post",
)
async def create_post(body: BlogPostCreate, db: AsyncSession = Depends(get_db)) -> BlogPost:
    post = BlogPost(**body.model_dump())
    db.add(post)
    await db.flush()
    await db.refresh(post)
    logger.info("Published blog post %s", post.id)
    return post


@admin_router.put("/{post_id}", response_model=BlogPostResponse, summary="Update a blog post")
async def update_post(
    post_id: uuid.UUID,
    body: BlogPostUpdate,
    db: AsyncSession = Depends(get_db),
) -> BlogPost:
    post = await _get_post_or_404(post_id, db)

    for field, value in body.model_dump(exclude_unset=True).items():
        setattr(post, field, value)

    db.add(post)
    await db.flush()
    await db.refresh(post)
    return post


@admin_router.delete("/{post_id}", response_model=MessageResponse, summary="Delete a blog post")
async def delete_post(post_id: uuid.UUID, db: AsyncSession = Depends(get_db)) -> MessageResponse:
    post = await _get_post_or_404(post_id, db)
    await db.delete(post)
    await db.flush()
    return MessageResponse(message="Blog post deleted")
