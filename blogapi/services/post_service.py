"""
Authoring operations on stored posts.

Handles creation, edits, status transitions, deletion, promotion of due
scheduled posts and importing the bundled articles into the store.
"""
import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from ..clock import Clock, utcnow
from ..config import Settings, get_settings
from ..errors import BlogError, NotFoundError, ValidationError
from ..logging_config import content_logger, timed
from ..models.post import Post
from ..static_posts import STATIC_POSTS, StaticPost
from .publication import PostStatus, apply_status, parse_status, post_is_visible, promote_due
from .store import check_length, store_operation

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

OPTIONAL_TEXT_FIELDS = ("content", "excerpt")
NULLABLE_FIELDS = ("featured_image", "meta_description")
LIMITED_FIELDS = ("title", "slug", "excerpt", "featured_image", "meta_description", "author")


def require_text(value: Optional[str], field: str) -> str:
    """Trimmed value of a required text field."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required", {"field": field})
    return str(value).strip()


def normalize_slug(value: Optional[str]) -> str:
    """Trim and lowercase a slug, then check it is URL-safe."""
    slug = require_text(value, "slug").lower()
    if not SLUG_RE.match(slug):
        raise ValidationError(
            "slug may only contain lowercase letters, digits and single hyphens",
            {"field": "slug", "value": slug},
        )
    return slug


def clean_tags(tags: Optional[List[str]]) -> List[str]:
    """Drop blank tags, keep order."""
    return [t.strip() for t in (tags or []) if t and t.strip()]


class PostService:
    """Write side of the blog. Every method commits its own changes."""

    def __init__(self, db: Session, clock: Clock = utcnow, settings: Optional[Settings] = None):
        self.db = db
        self.clock = clock
        self.settings = settings or get_settings()

    # ------------------------------------------------------------
    # Reads for the authoring surface
    # ------------------------------------------------------------

    def list_posts(self, status: Optional[str] = None) -> List[Post]:
        """All posts including drafts, newest first."""
        with store_operation(self.db, "list posts"):
            query = self.db.query(Post)
            if status:
                query = query.filter(Post.status == parse_status(status).value)
            return query.order_by(Post.created_at.desc(), Post.id.desc()).all()

    def get_post(self, post_id: int) -> Post:
        with store_operation(self.db, "get post", post_id=post_id):
            post = self.db.query(Post).filter(Post.id == post_id).first()
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    # ------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------

    def create_post(self, data: Dict[str, Any]) -> Post:
        title = require_text(data.get("title"), "title")
        slug = normalize_slug(data.get("slug"))
        self._ensure_slug_available(slug)

        now = self.clock()
        post = Post(
            title=title,
            slug=slug,
            content=data.get("content") or "",
            excerpt=data.get("excerpt") or "",
            featured_image=data.get("featured_image"),
            meta_description=data.get("meta_description"),
            tags=clean_tags(data.get("tags")),
            author=(data.get("author") or "").strip() or self.settings.default_author,
            status=PostStatus.DRAFT.value,
            created_at=now,
            updated_at=now,
        )
        self._check_lengths(post)
        apply_status(post, data.get("status") or PostStatus.DRAFT, data.get("scheduled_at"), now)

        with store_operation(self.db, "create post", slug=slug):
            self.db.add(post)
            self.db.commit()
            self.db.refresh(post)

        content_logger.info("post created", post_id=post.id, slug=post.slug, status=post.status)
        return post

    def update_post(self, post_id: int, data: Dict[str, Any]) -> Post:
        """
        Merge `data` into the post. Status rules apply whenever `status` or
        `scheduled_at` is part of the update. Nothing is saved if any field
        is rejected.
        """
        post = self.get_post(post_id)
        previous_status = post.status
        now = self.clock()

        try:
            if "title" in data:
                post.title = require_text(data["title"], "title")
            if "slug" in data:
                slug = normalize_slug(data["slug"])
                if slug != post.slug:
                    self._ensure_slug_available(slug, exclude_id=post.id)
                    post.slug = slug
            for field in OPTIONAL_TEXT_FIELDS:
                if field in data:
                    setattr(post, field, data[field] or "")
            for field in NULLABLE_FIELDS:
                if field in data:
                    setattr(post, field, data[field])
            if "author" in data:
                post.author = (data["author"] or "").strip() or self.settings.default_author
            if "tags" in data:
                post.tags = clean_tags(data["tags"])
            self._check_lengths(post)
            if "status" in data or "scheduled_at" in data:
                apply_status(post, data.get("status") or post.status, data.get("scheduled_at"), now)
        except BlogError:
            self.db.rollback()
            raise

        post.updated_at = now
        with store_operation(self.db, "update post", post_id=post_id):
            self.db.commit()
            self.db.refresh(post)

        if post.status != previous_status:
            content_logger.info(
                "post status changed",
                post_id=post.id,
                slug=post.slug,
                from_status=previous_status,
                to_status=post.status,
            )
        return post

    def delete_post(self, post_id: int) -> None:
        """Remove the post row. Comments on its slug are kept."""
        post = self.get_post(post_id)
        slug = post.slug
        with store_operation(self.db, "delete post", post_id=post_id):
            self.db.delete(post)
            self.db.commit()
        content_logger.info("post deleted", post_id=post_id, slug=slug)

    @timed(content_logger, slow_ms=1000)
    def publish_due(self) -> List[Post]:
        """Rewrite scheduled posts whose time has passed as published."""
        now = self.clock()
        with store_operation(self.db, "publish due posts"):
            scheduled = self.db.query(Post).filter(Post.status == PostStatus.SCHEDULED.value).all()
            due = [post for post in scheduled if post_is_visible(post, now)]
            for post in due:
                promote_due(post, now)
                post.updated_at = now
            if due:
                self.db.commit()
                for post in due:
                    self.db.refresh(post)

        if due:
            content_logger.info("published due posts", count=len(due), slugs=[p.slug for p in due])
        return due

    def import_static_posts(self, articles: Optional[List[StaticPost]] = None) -> List[Post]:
        """
        Copy bundled articles into the store as published posts dated by the
        article. Slugs already in the store are skipped.
        """
        articles = STATIC_POSTS if articles is None else articles
        now = self.clock()

        with store_operation(self.db, "import static posts"):
            existing = {slug for (slug,) in self.db.query(Post.slug).all()}
            created = []
            for article in articles:
                if article.slug in existing:
                    content_logger.info("import skipped, slug exists", slug=article.slug)
                    continue
                post = Post(
                    title=article.title,
                    slug=article.slug,
                    content=article.content,
                    excerpt=article.snippet,
                    featured_image=article.featured_image,
                    meta_description=article.snippet,
                    tags=list(article.tags),
                    author=article.author,
                    status=PostStatus.PUBLISHED.value,
                    published_at=datetime.strptime(article.date, "%Y-%m-%d"),
                    created_at=now,
                    updated_at=now,
                )
                self.db.add(post)
                existing.add(article.slug)
                created.append(post)
            self.db.commit()
            for post in created:
                self.db.refresh(post)

        content_logger.info("imported static posts", count=len(created))
        return created

    # ------------------------------------------------------------

    def _check_lengths(self, post: Post) -> None:
        for field in LIMITED_FIELDS:
            check_length(Post.__table__.c[field], getattr(post, field), field)

    def _ensure_slug_available(self, slug: str, exclude_id: Optional[int] = None) -> None:
        with store_operation(self.db, "check slug", slug=slug):
            query = self.db.query(Post.id).filter(Post.slug == slug)
            if exclude_id is not None:
                query = query.filter(Post.id != exclude_id)
            taken = query.first() is not None
        if taken:
            raise ValidationError(f"Slug '{slug}' is already in use", {"field": "slug"})
