"""
Comment routes. Reading and posting comments needs no account, and the
slug does not have to belong to a stored post.
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
from typing import List

from ..clock import Clock, get_clock, isoformat
from ..config import get_settings
from ..database import get_db
from ..limiter import limiter
from ..models.comment import Comment
from ..schemas.comments import CommentCreate
from ..services.comment_service import CommentService

settings = get_settings()

router = APIRouter(prefix="/api/posts", tags=["comments"])


def comment_to_dict(comment: Comment) -> dict:
    """Convert a Comment model to a dictionary response."""
    return {
        "id": comment.id,
        "author_name": comment.author_name,
        "comment": comment.comment,
        "created_at": isoformat(comment.created_at),
    }


@router.get("/{slug}/comments", response_model=List[dict])
def get_comments(
    slug: str,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Get comments for a post, newest first."""
    comments = CommentService(db, clock).list_comments_by_slug(slug)
    return [comment_to_dict(c) for c in comments]


@router.post("/{slug}/comments", response_model=dict, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.comment_rate_limit)
def create_comment(
    request: Request,
    slug: str,
    comment_data: CommentCreate,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
):
    """Add a comment to a post."""
    comment = CommentService(db, clock).create_comment(
        slug, comment_data.author_name, comment_data.comment
    )
    return comment_to_dict(comment)
