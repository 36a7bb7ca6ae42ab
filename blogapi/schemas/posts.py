from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime

from ..services.publication import PostStatus


class PostBase(BaseModel):
    title: str
    slug: str
    content: str = ""
    excerpt: str = ""
    featured_image: Optional[str] = None
    meta_description: Optional[str] = None
    tags: List[str] = []
    author: Optional[str] = None


class PostCreate(PostBase):
    status: PostStatus = PostStatus.DRAFT
    scheduled_at: Optional[datetime] = None


class PostUpdate(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    meta_description: Optional[str] = None
    tags: Optional[List[str]] = None
    author: Optional[str] = None
    status: Optional[PostStatus] = None
    scheduled_at: Optional[datetime] = None


class PostSummary(BaseModel):
    """Public listing shape, shared by stored and bundled posts."""
    slug: str
    title: str
    date: str
    snippet: str
    tags: List[str] = []
    author: str
    model_config = ConfigDict(populate_by_name=True)

    read_time: int = Field(alias="readTime")
    featured_image: Optional[str] = None


class PostDetail(PostSummary):
    content: str
    meta_description: Optional[str] = None
    published_at: Optional[str] = None
    source: str
