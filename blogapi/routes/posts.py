"""
Public blog routes: visible posts only.
"""
from fastapi import APIRouter, Depends
from typing import List

from ..schemas.posts import PostDetail, PostSummary
from ..services.providers import ContentProvider, get_content_provider

router = APIRouter(prefix="/api/posts", tags=["posts"])


@router.get("", response_model=List[PostSummary])
def get_posts(provider: ContentProvider = Depends(get_content_provider)):
    """List published posts, most recent first."""
    return provider.list_visible_posts()


@router.get("/{slug}", response_model=PostDetail)
def get_post(slug: str, provider: ContentProvider = Depends(get_content_provider)):
    """Get a single post. Drafts and future scheduled posts are reported as not found."""
    return provider.get_post_by_slug(slug)
