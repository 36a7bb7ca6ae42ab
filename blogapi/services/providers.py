"""
Read side of the blog: where public posts come from.

Three interchangeable providers sit behind one interface:

- StoreContentProvider: posts in the database, filtered by the
  publication lifecycle.
- StaticContentProvider: the articles bundled in `static_posts`.
- FallbackContentProvider: the store first; bundled articles fill in any
  slug the store does not know about.

Which one serves requests is decided by `Settings.content_source`.
"""
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Set

from fastapi import Depends
from sqlalchemy.orm import Session

from ..clock import Clock, get_clock, isoformat, utcnow
from ..config import Settings, get_settings
from ..database import get_db
from ..errors import NotFoundError
from ..models.post import Post
from ..schemas.posts import PostDetail, PostSummary
from ..static_posts import STATIC_POSTS, StaticPost, get_static_post
from .publication import CANDIDATE_STATUSES, effective_published_at, post_is_visible
from .store import store_operation

CONTENT_SOURCES = ("store", "static", "fallback")

_TAG_RE = re.compile(r"<[^>]+>")


def estimate_read_time(html: str, words_per_minute: int = 200) -> int:
    """Minutes to read an HTML body, rounded up, at least one."""
    words = len(_TAG_RE.sub(" ", html or "").split())
    return max(1, math.ceil(words / max(words_per_minute, 1)))


@dataclass
class Entry:
    """A visible post together with the instant it went public."""
    published: datetime
    tiebreak: int
    summary: PostSummary

    @property
    def sort_key(self):
        return (self.published, self.tiebreak)


# ============================================================
# CONVERSIONS
# ============================================================

def summary_from_post(post: Post, settings: Settings) -> PostSummary:
    published = effective_published_at(post)
    return PostSummary(
        slug=post.slug,
        title=post.title,
        date=published.date().isoformat() if published else "",
        snippet=post.excerpt or "",
        tags=list(post.tags or []),
        author=post.author or settings.default_author,
        read_time=estimate_read_time(post.content, settings.words_per_minute),
        featured_image=post.featured_image,
    )


def detail_from_post(post: Post, settings: Settings) -> PostDetail:
    summary = summary_from_post(post, settings)
    return PostDetail(
        **summary.model_dump(),
        content=post.content or "",
        meta_description=post.meta_description,
        published_at=isoformat(effective_published_at(post)),
        source="store",
    )


def static_published_at(article: StaticPost) -> datetime:
    return datetime.strptime(article.date, "%Y-%m-%d")


def summary_from_static(article: StaticPost) -> PostSummary:
    return PostSummary(
        slug=article.slug,
        title=article.title,
        date=article.date,
        snippet=article.snippet,
        tags=list(article.tags),
        author=article.author,
        read_time=article.read_time,
        featured_image=article.featured_image,
    )


def detail_from_static(article: StaticPost) -> PostDetail:
    return PostDetail(
        **summary_from_static(article).model_dump(),
        content=article.content,
        meta_description=article.snippet,
        published_at=isoformat(static_published_at(article)),
        source="static",
    )


# ============================================================
# PROVIDERS
# ============================================================

class ContentProvider(ABC):
    """Public read operations over some source of posts."""

    name = "abstract"

    @abstractmethod
    def visible_entries(self) -> List[Entry]:
        """Every post currently visible, in no particular order."""

    @abstractmethod
    def get_post_by_slug(self, slug: str) -> PostDetail:
        """Full post for `slug`, or NotFoundError if it is not visible."""

    def list_visible_posts(self) -> List[PostSummary]:
        """Visible posts, most recently published first."""
        entries = sorted(self.visible_entries(), key=lambda e: e.sort_key, reverse=True)
        return [e.summary for e in entries]


class StoreContentProvider(ContentProvider):
    name = "store"

    def __init__(self, db: Session, clock: Clock = utcnow, settings: Optional[Settings] = None):
        self.db = db
        self.clock = clock
        self.settings = settings or get_settings()

    def visible_entries(self) -> List[Entry]:
        now = self.clock()
        with store_operation(self.db, "list posts"):
            candidates = self.db.query(Post).filter(Post.status.in_(CANDIDATE_STATUSES)).all()
        return [
            Entry(effective_published_at(post), post.id, summary_from_post(post, self.settings))
            for post in candidates
            if post_is_visible(post, now)
        ]

    def get_post_by_slug(self, slug: str) -> PostDetail:
        with store_operation(self.db, "get post", slug=slug):
            post = self.db.query(Post).filter(Post.slug == slug).first()
        # Drafts and posts scheduled for later look exactly like missing ones.
        if post is None or not post_is_visible(post, self.clock()):
            raise NotFoundError("Post", slug)
        return detail_from_post(post, self.settings)

    def known_slugs(self) -> Set[str]:
        """Slugs of every stored post, whatever its status."""
        with store_operation(self.db, "list slugs"):
            return {slug for (slug,) in self.db.query(Post.slug).all()}

    def has_slug(self, slug: str) -> bool:
        with store_operation(self.db, "get post", slug=slug):
            return self.db.query(Post.id).filter(Post.slug == slug).first() is not None


class StaticContentProvider(ContentProvider):
    name = "static"

    def __init__(self, posts: Optional[List[StaticPost]] = None):
        self.posts = list(STATIC_POSTS if posts is None else posts)

    def visible_entries(self) -> List[Entry]:
        count = len(self.posts)
        return [
            Entry(static_published_at(article), count - index, summary_from_static(article))
            for index, article in enumerate(self.posts)
        ]

    def get_post_by_slug(self, slug: str) -> PostDetail:
        article = get_static_post(slug, self.posts)
        if article is None:
            raise NotFoundError("Post", slug)
        return detail_from_static(article)


class FallbackContentProvider(ContentProvider):
    """
    Stored posts take precedence. A slug present in the store hides the
    bundled article of the same slug even while the stored post is a draft,
    so unpublishing an imported article takes it offline.
    """

    name = "fallback"

    def __init__(self, store: StoreContentProvider, static: StaticContentProvider):
        self.store = store
        self.static = static

    def visible_entries(self) -> List[Entry]:
        taken = self.store.known_slugs()
        entries = self.store.visible_entries()
        entries.extend(e for e in self.static.visible_entries() if e.summary.slug not in taken)
        return entries

    def get_post_by_slug(self, slug: str) -> PostDetail:
        if self.store.has_slug(slug):
            return self.store.get_post_by_slug(slug)
        return self.static.get_post_by_slug(slug)


def build_content_provider(
    source: str,
    db: Session,
    clock: Clock = utcnow,
    settings: Optional[Settings] = None,
) -> ContentProvider:
    """Construct the provider named by `source`."""
    settings = settings or get_settings()
    if source == "store":
        return StoreContentProvider(db, clock, settings)
    if source == "static":
        return StaticContentProvider()
    if source == "fallback":
        return FallbackContentProvider(
            StoreContentProvider(db, clock, settings),
            StaticContentProvider(),
        )
    raise ValueError(f"Unknown content source '{source}'. Expected one of: {', '.join(CONTENT_SOURCES)}")


def get_content_provider(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> ContentProvider:
    """FastAPI dependency for the configured provider."""
    settings = get_settings()
    return build_content_provider(settings.content_source, db, clock, settings)

