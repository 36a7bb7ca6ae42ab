"""
Seed the database with an admin account and the bundled articles.

Usage:
    ADMIN_EMAIL=you@example.com ADMIN_PASSWORD=... python seed.py [--skip-posts]
"""
import argparse
import sys

from blogapi.auth import get_password_hash
from blogapi.config import get_settings
from blogapi.database import SessionLocal, engine, Base
from blogapi.logging_config import get_logger
from blogapi.models import User
from blogapi.services.post_service import PostService

logger = get_logger("seed")


def seed_admin(db, email: str, password: str) -> User:
    """Create the admin account, or promote an existing user with that email."""
    user = db.query(User).filter(User.email == email).first()
    if user:
        user.is_admin = True
        user.is_active = True
        logger.info("admin exists, ensured admin flag", email=email)
    else:
        user = User(
            email=email,
            hashed_password=get_password_hash(password),
            display_name=email.split("@")[0],
            is_admin=True,
        )
        db.add(user)
        logger.info("admin created", email=email)
    db.commit()
    db.refresh(user)
    return user


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the blog database")
    parser.add_argument("--skip-posts", action="store_true", help="Do not import bundled articles")
    args = parser.parse_args()

    settings = get_settings()
    if not settings.admin_password:
        print("ADMIN_PASSWORD must be set", file=sys.stderr)
        return 1

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed_admin(db, settings.admin_email, settings.admin_password)
        imported = [] if args.skip_posts else PostService(db).import_static_posts()
    finally:
        db.close()

    print("Database seeded successfully!")
    print(f"  - admin: {settings.admin_email}")
    print(f"  - {len(imported)} posts imported")
    return 0


if __name__ == "__main__":
    sys.exit(main())
