"""Pydantic schemas for request and response validation."""

import math
import re
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, StrictStr, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_AUTHOR = "Alex Shyaka"
WORDS_PER_MINUTE = 200
SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(title: str) -> str:
    """
    Derive a URL-safe slug from a post title.

    Lowercases the title, collapses every run of characters outside
    [a-z0-9] into a single hyphen and trims hyphens from both ends.

    Args:
        title: Post title

    Returns:
        str: Slug, possibly empty when the title has no usable characters
    """
    return re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")


def estimate_read_time(content: str) -> int:
    """Reading time in whole minutes at 200 words per minute, rounded up."""
    return math.ceil(len(content.split()) / WORDS_PER_MINUTE)


def _not_blank(value: Optional[str], field_name: str) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError(f"{field_name} cannot be empty")
    return value


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys, populated by either key style."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


# Blog Post Schemas
class BlogPostMetadata(CamelModel):
    """Structured metadata attached to every blog post."""

    read_time: int = 0
    views: int = 0
    author: str = DEFAULT_AUTHOR


class BlogPostMetadataUpdate(CamelModel):
    """Metadata supplied by a caller. Unset fields fall back during merging."""

    read_time: Optional[int] = Field(None, ge=0)
    views: Optional[int] = Field(None, ge=0)
    author: Optional[str] = None


class BlogPost(CamelModel):
    """Schema for a stored blog post."""

    id: str
    title: str
    slug: str
    content: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    published: bool = False
    metadata: BlogPostMetadata = Field(default_factory=BlogPostMetadata)
    created_at: datetime
    updated_at: datetime


class BlogPostCreate(CamelModel):
    """Schema for blog post creation request."""

    title: str
    slug: Optional[str] = None
    content: str
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    published: bool = False
    metadata: Optional[BlogPostMetadataUpdate] = None

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v: str) -> str:
        """Validate that title is not empty."""
        return _not_blank(v, 'Title')

    @field_validator('content')
    @classmethod
    def content_not_empty(cls, v: str) -> str:
        """Validate that content is not empty."""
        return _not_blank(v, 'Content')

    @model_validator(mode='after')
    def derive_slug(self) -> 'BlogPostCreate':
        """Fill in the slug from the title when the caller left it out."""
        slug = (self.slug or "").strip() or slugify(self.title)
        if not SLUG_PATTERN.match(slug):
            raise ValueError(
                'Slug must contain only lowercase letters, digits and single hyphens'
            )
        self.slug = slug
        return self


class BlogPostUpdate(CamelModel):
    """Schema for partial blog post update request."""

    title: Optional[str] = None
    slug: Optional[str] = None
    content: Optional[str] = None
    excerpt: Optional[str] = None
    featured_image: Optional[str] = None
    tags: Optional[List[str]] = None
    published: Optional[bool] = None
    metadata: Optional[BlogPostMetadataUpdate] = None

    @field_validator('title')
    @classmethod
    def title_not_empty(cls, v: Optional[str]) -> Optional[str]:
        """Validate that title, when given, is not empty."""
        return _not_blank(v, 'Title')

    @field_validator('content')
    @classmethod
    def content_not_empty(cls, v: Optional[str]) -> Optional[str]:
        """Validate that content, when given, is not empty."""
        return _not_blank(v, 'Content')

    @field_validator('slug')
    @classmethod
    def slug_format(cls, v: Optional[str]) -> Optional[str]:
        """Validate slug format when a slug is supplied."""
        if v is not None and not SLUG_PATTERN.match(v):
            raise ValueError(
                'Slug must contain only lowercase letters, digits and single hyphens'
            )
        return v


# Comment Schemas
class Comment(CamelModel):
    """Schema for a stored comment."""

    id: str
    post_id: str
    author: str
    email: str
    content: str
    created_at: datetime


class CommentCreate(CamelModel):
    """Schema for comment creation. post_id comes from the request path."""

    post_id: str
    author: str
    email: str
    content: str

    @field_validator('author', 'email', 'content')
    @classmethod
    def not_empty(cls, v: str, info) -> str:
        """Validate that required comment fields are not empty."""
        return _not_blank(v, info.field_name.capitalize())


# User Schemas
class User(CamelModel):
    """Schema for a stored user."""

    id: str
    username: str
    password: str


class UserCreate(CamelModel):
    """Schema for user creation."""

    username: str
    password: str


# Contact / Admin Schemas
class ContactRequest(BaseModel):
    """Schema for contact form submission."""

    name: str
    email: EmailStr
    subject: Optional[str] = None
    message: str

    @field_validator('name', 'message')
    @classmethod
    def not_empty(cls, v: str, info) -> str:
        """Validate that required contact fields are not empty."""
        return _not_blank(v, info.field_name.capitalize())


class AdminVerifyRequest(BaseModel):
    """Schema for admin password check."""

    password: str


class ImportContentRequest(BaseModel):
    """Schema for content import request."""

    url: Optional[StrictStr] = None


class ImportContentResponse(BaseModel):
    """Schema for content import acknowledgement."""

    message: str
    url: str


class SuccessResponse(BaseModel):
    """Schema for bare success acknowledgement."""

    success: bool = True


# Object Storage Schemas
class FeaturedImageRequest(CamelModel):
    """Schema for setting a post's featured image from an upload URL."""

    image_url: Optional[str] = Field(None, alias='imageURL')


class FeaturedImageResponse(CamelModel):
    """Schema for featured image update response."""

    object_path: str
    post: BlogPost


class UploadURLResponse(CamelModel):
    """Schema for signed upload URL response."""

    upload_url: str = Field(alias='uploadURL')
