"""
Authoring routes for blog posts. All of them require an admin account.
"""
from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional

from ..auth import get_current_author
from ..clock import Clock, get_clock, isoformat
from ..database import get_db
from ..models.post import Post
from ..models.user import User
from ..schemas.posts import PostCreate, PostUpdate
from ..services.post_service import PostService

router = APIRouter(prefix="/api/admin/posts", tags=["admin"])


def post_to_dict(post: Post) -> dict:
    """Convert a Post model to a dictionary response."""
    return {
        "id": post.id,
        "title": post.title,
        "slug": post.slug,
        "content": post.content,
        "excerpt": post.excerpt or "",
        "featured_image": post.featured_image,
        "meta_description": post.meta_description,
        "tags": post.tags or [],
        "author": post.author,
        "status": post.status,
        "created_at": isoformat(post.created_at),
        "updated_at": isoformat(post.updated_at),
        "published_at": isoformat(post.published_at),
        "scheduled_at": isoformat(post.scheduled_at),
    }


def get_post_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> PostService:
    return PostService(db, clock)


@router.get("", response_model=List[dict])
def list_posts(
    status: Optional[str] = None,
    service: PostService = Depends(get_post_service),
    current_user: User = Depends(get_current_author),
):
    """Get every post, drafts included, with optional status filtering."""
    return [post_to_dict(p) for p in service.list_posts(status)]


@router.post("/publish-due", response_model=dict)
def publish_due_posts(
    service: PostService = Depends(get_post_service),
    current_user: User = Depends(get_current_author),
):
    """Store the published status of scheduled posts whose time has passed."""
    return {"published": [post_to_dict(p) for p in service.publish_due()]}


@router.get("/{post_id}", response_model=dict)
def get_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
    current_user: User = Depends(get_current_author),
):
    """Get a single post by ID, whatever its status."""
    return post_to_dict(service.get_post(post_id))


@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    service: PostService = Depends(get_post_service),
    current_user: User = Depends(get_current_author),
):
    """Create a new post. Defaults to draft."""
    return post_to_dict(service.create_post(post_data.model_dump()))


@router.put("/{post_id}", response_model=dict)
def update_post(
    post_id: int,
    post_update: PostUpdate,
    service: PostService = Depends(get_post_service),
    current_user: User = Depends(get_current_author),
):
    """Update a post. Only the supplied fields change."""
    update_data = post_update.model_dump(exclude_unset=True)
    return post_to_dict(service.update_post(post_id, update_data))


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(
    post_id: int,
    service: PostService = Depends(get_post_service),
    current_user: User = Depends(get_current_author),
):
    """Delete a post. Its comments stay attached to the slug."""
    service.delete_post(post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
