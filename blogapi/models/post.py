"""
Post model for blog articles.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from ..clock import utcnow
from ..database import Base


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    slug = Column(String(200), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False, default="")  # serialized HTML
    excerpt = Column(String(500), default="")
    featured_image = Column(String(500), nullable=True)
    meta_description = Column(String(300), nullable=True)
    tags = Column(JSON, default=list)
    author = Column(String(100), nullable=True)
    status = Column(String(20), default="draft", nullable=False, index=True)  # draft, scheduled, published
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow)
    published_at = Column(DateTime, nullable=True)
    scheduled_at = Column(DateTime, nullable=True)

    def __repr__(self):
        return f"<Post {self.slug} ({self.status})>"
