"""
Reader comments, keyed by post slug.
"""
from typing import List, Optional

from sqlalchemy.orm import Session

from ..clock import Clock, utcnow
from ..config import Settings, get_settings
from ..errors import ValidationError
from ..logging_config import content_logger
from ..models.comment import Comment
from .store import check_length, store_operation


class CommentService:
    def __init__(self, db: Session, clock: Clock = utcnow, settings: Optional[Settings] = None):
        self.db = db
        self.clock = clock
        self.settings = settings or get_settings()

    def list_comments_by_slug(self, slug: str) -> List[Comment]:
        """Comments on `slug`, newest first. The slug need not exist as a post."""
        with store_operation(self.db, "list comments", slug=slug):
            return (
                self.db.query(Comment)
                .filter(Comment.post_slug == slug)
                .order_by(Comment.created_at.desc(), Comment.id.desc())
                .all()
            )

    def create_comment(self, slug: str, author_name: Optional[str], comment: Optional[str]) -> Comment:
        slug = (slug or "").strip()
        author_name = (author_name or "").strip()
        body = (comment or "").strip()

        if not slug:
            raise ValidationError("slug is required", {"field": "slug"})
        if not author_name:
            raise ValidationError("Name is required", {"field": "author_name"})
        if not body:
            raise ValidationError("Comment is required", {"field": "comment"})
        check_length(Comment.__table__.c.post_slug, slug, "slug")
        check_length(Comment.__table__.c.author_name, author_name, "author_name")
        limit = self.settings.comment_max_length
        if len(body) > limit:
            raise ValidationError(
                f"Comment must be {limit} characters or fewer",
                {"field": "comment", "max_length": limit},
            )

        record = Comment(
            post_slug=slug,
            author_name=author_name,
            comment=body,
            created_at=self.clock(),
        )
        with store_operation(self.db, "create comment", slug=slug):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)

        content_logger.info("comment created", comment_id=record.id, slug=slug)
        return record
