"""Database models for PersonalSiteAPI."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class User(Base):
    """User model. Stored for parity with the storage interface, not exposed over HTTP."""

    __tablename__ = "users"

    id = Column(String, primary_key=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)


class BlogPost(Base):
    """Blog post model."""

    __tablename__ = "blog_posts"

    # Insertion order for search results and first-match slug lookup
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False, index=True)
    title = Column(String, nullable=False)
    slug = Column(String, nullable=False, index=True)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    featured_image = Column(String, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    published = Column(Boolean, nullable=False, default=False)
    # "metadata" is reserved on declarative classes
    post_metadata = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Comment(Base):
    """Comment model. post_id is a plain column, not a foreign key."""

    __tablename__ = "comments"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False, index=True)
    post_id = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False)
    email = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
