"""
Comment model. Comments point at a post slug, not a post row, so they
also work for the static articles.
"""
from sqlalchemy import Column, Integer, String, DateTime, Text
from ..clock import utcnow
from ..database import Base


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    post_slug = Column(String(200), nullable=False, index=True)
    author_name = Column(String(100), nullable=False)
    comment = Column(Text, nullable=False)
    created_at = Column(DateTime, default=utcnow, index=True)
