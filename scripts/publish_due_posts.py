#!/usr/bin/env python3
"""
Store the published status of scheduled posts whose time has passed.

Reads already treat due posts as published, so this is optional
housekeeping. Safe to run from cron at any interval.

Usage:
    python scripts/publish_due_posts.py [--dry-run]
"""
import argparse
import sys

from blogapi.clock import utcnow
from blogapi.database import SessionLocal
from blogapi.models import Post
from blogapi.services.post_service import PostService
from blogapi.services.publication import PostStatus, post_is_visible


def main() -> int:
    parser = argparse.ArgumentParser(description="Publish scheduled posts that are due")
    parser.add_argument("--dry-run", action="store_true", help="List due posts without changing them")
    args = parser.parse_args()

    db = SessionLocal()
    try:
        if args.dry_run:
            now = utcnow()
            scheduled = db.query(Post).filter(Post.status == PostStatus.SCHEDULED.value).all()
            due = [p for p in scheduled if post_is_visible(p, now)]
            for post in due:
                print(f"[DRY RUN] Would publish: {post.slug} (scheduled {post.scheduled_at})")
            return 0

        published = PostService(db).publish_due()
        for post in published:
            print(f"Published: {post.slug}")
        print(f"{len(published)} post(s) published")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
