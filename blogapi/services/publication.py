"""
Publication lifecycle for posts: draft, scheduled, published.

A scheduled post whose time has come is treated as published when read,
without rewriting its stored status. `is_visible` is the only place that
rule lives; every read path goes through it.
"""
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from ..clock import to_utc
from ..errors import ValidationError
from ..models.post import Post


class PostStatus(str, Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"


# Statuses that can possibly be visible. Used to narrow queries only.
CANDIDATE_STATUSES = (PostStatus.PUBLISHED.value, PostStatus.SCHEDULED.value)


def parse_status(value: Union[str, PostStatus]) -> PostStatus:
    """Coerce a raw status value, rejecting anything outside the lifecycle."""
    try:
        return PostStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in PostStatus)
        raise ValidationError(
            f"Invalid status '{value}'. Must be one of: {allowed}",
            {"field": "status"},
        )


def is_visible(status: str, scheduled_at: Optional[datetime], now: datetime) -> bool:
    """Whether a post with this status and schedule is public at `now`."""
    if status == PostStatus.PUBLISHED:
        return True
    if status == PostStatus.SCHEDULED:
        return scheduled_at is not None and to_utc(scheduled_at) <= now
    return False


def post_is_visible(post: Post, now: datetime) -> bool:
    return is_visible(post.status, post.scheduled_at, now)


def effective_published_at(post: Post) -> Optional[datetime]:
    """The instant a visible post went public, used for ordering and display."""
    if post.status == PostStatus.PUBLISHED:
        return post.published_at or post.created_at
    if post.status == PostStatus.SCHEDULED:
        return post.scheduled_at
    return None


def apply_status(
    post: Post,
    status: Union[str, PostStatus],
    scheduled_at: Optional[datetime],
    now: datetime,
) -> Post:
    """
    Move `post` to `status`, keeping its lifecycle timestamps consistent.

    - published: published_at is set (kept when already published),
      scheduled_at is cleared.
    - scheduled: scheduled_at (given, or the one already stored) must be
      strictly after `now`; published_at is cleared.
    - draft: both timestamps are cleared.

    Raises ValidationError for unknown statuses, a schedule not in the
    future, or a scheduled_at supplied for any status other than scheduled.
    """
    target = parse_status(status)
    if scheduled_at is not None and target != PostStatus.SCHEDULED:
        raise ValidationError(
            f"scheduled_at only applies to scheduled posts, not {target.value}",
            {"field": "scheduled_at"},
        )

    if target == PostStatus.PUBLISHED:
        if post.status != PostStatus.PUBLISHED or post.published_at is None:
            post.published_at = now
        post.scheduled_at = None

    elif target == PostStatus.SCHEDULED:
        when = to_utc(scheduled_at) if scheduled_at is not None else post.scheduled_at
        if when is None:
            raise ValidationError(
                "scheduled_at is required to schedule a post",
                {"field": "scheduled_at"},
            )
        if when <= now:
            raise ValidationError(
                "Scheduled time must be in the future",
                {"field": "scheduled_at"},
            )
        post.scheduled_at = when
        post.published_at = None

    else:
        post.published_at = None
        post.scheduled_at = None

    post.status = target.value
    return post


def promote_due(post: Post, now: datetime) -> Post:
    """Persist the published state of a scheduled post whose time has passed."""
    if post.status != PostStatus.SCHEDULED or not post_is_visible(post, now):
        raise ValidationError(f"Post '{post.slug}' is not due for publication")
    post.status = PostStatus.PUBLISHED.value
    post.published_at = post.scheduled_at
    post.scheduled_at = None
    return post
