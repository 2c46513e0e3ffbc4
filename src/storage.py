"""Content store for blog posts, comments and users.

Two interchangeable backends implement IStorage: MemStorage keeps everything in
process memory and is reseeded with sample posts on every start, and
DatabaseStorage persists to the blog_posts/comments/users tables through
SQLAlchemy. Lookups return None instead of raising; request validation
happens before a store is called.
"""

import logging
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from src import models
from src.auth import hash_password
from src.database import init_db, make_engine, make_session_factory
from src.schemas import (
    BlogPost,
    BlogPostCreate,
    BlogPostMetadata,
    BlogPostMetadataUpdate,
    BlogPostUpdate,
    Comment,
    CommentCreate,
    User,
    UserCreate,
    estimate_read_time,
    slugify,
)
from src.seed import SEED_POSTS

# Configure logging
logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

# Fields that a partial update may never set to null
NON_NULLABLE_FIELDS = {"title", "slug", "content", "tags", "published"}


def merge_metadata(
    new: Optional[BlogPostMetadataUpdate],
    existing: Optional[BlogPostMetadata],
) -> BlogPostMetadata:
    """
    Merge caller-supplied metadata over an existing record.

    Each field resolves independently: the new value when supplied, else the
    existing value, else the hardcoded default.

    Args:
        new: Metadata from the request, possibly partial or absent
        existing: Metadata currently stored, or None for a new post

    Returns:
        BlogPostMetadata: Fully populated metadata
    """
    defaults = BlogPostMetadata()
    merged = {}
    for field in ("read_time", "views", "author"):
        value = getattr(new, field) if new is not None else None
        if value is None and existing is not None:
            value = getattr(existing, field)
        if value is None:
            value = getattr(defaults, field)
        merged[field] = value
    return BlogPostMetadata(**merged)


def post_matches_query(post: BlogPost, query: str) -> bool:
    """Case-insensitive substring match against title, content or any tag."""
    needle = query.lower()
    return (
        needle in post.title.lower()
        or needle in post.content.lower()
        or any(needle in tag.lower() for tag in post.tags)
    )


def paginate(posts: List[BlogPost], limit: Optional[int], offset: Optional[int]) -> List[BlogPost]:
    """Skip the first `offset` posts, then keep at most `limit`."""
    if offset:
        posts = posts[offset:]
    if limit is not None:
        posts = posts[:limit]
    return posts


def build_new_post(data: BlogPostCreate, now: datetime) -> BlogPost:
    """Create a post record with store-assigned id, timestamps and defaults."""
    computed = BlogPostMetadata(read_time=estimate_read_time(data.content))
    return BlogPost(
        id=str(uuid.uuid4()),
        title=data.title,
        slug=data.slug or slugify(data.title),
        content=data.content,
        excerpt=data.excerpt or None,
        featured_image=data.featured_image or None,
        tags=list(data.tags or []),
        published=bool(data.published),
        metadata=merge_metadata(data.metadata, computed),
        created_at=now,
        updated_at=now,
    )


def apply_update(existing: BlogPost, data: BlogPostUpdate, now: datetime) -> BlogPost:
    """
    Merge a partial update over an existing post.

    Only fields present in the request are applied. Metadata fields fall back
    to the stored values, so the read time is kept when only content changes.

    Args:
        existing: Stored post
        data: Partial update
        now: Timestamp used for updated_at

    Returns:
        BlogPost: New post record
    """
    fields = {}
    for name, value in data.model_dump(exclude_unset=True, exclude={"metadata"}).items():
        if value is None and name in NON_NULLABLE_FIELDS:
            continue
        fields[name] = value

    fields["metadata"] = merge_metadata(data.metadata, existing.metadata)
    fields["updated_at"] = now
    return existing.model_copy(update=fields)


def _seed_post(entry: dict) -> BlogPost:
    return BlogPost(
        **{key: value for key, value in entry.items() if key != "metadata"},
        metadata=BlogPostMetadata(**entry["metadata"]),
        updated_at=entry["created_at"],
    )


class IStorage(ABC):
    """Operations every content store backend provides."""

    # User methods
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> User:
        ...

    # Blog post methods
    @abstractmethod
    def list_posts(
        self,
        published: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[BlogPost]:
        """Posts newest first, optionally filtered by published status, then paginated."""

    @abstractmethod
    def get_post(self, post_id: str) -> Optional[BlogPost]:
        ...

    @abstractmethod
    def get_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        """First-created post carrying the slug."""

    @abstractmethod
    def create_post(self, data: BlogPostCreate) -> BlogPost:
        ...

    @abstractmethod
    def update_post(self, post_id: str, data: BlogPostUpdate) -> Optional[BlogPost]:
        ...

    @abstractmethod
    def delete_post(self, post_id: str) -> bool:
        ...

    @abstractmethod
    def search_posts(self, query: str) -> List[BlogPost]:
        """Substring search in insertion order. Does not filter on published."""

    @abstractmethod
    def fetch_and_record_view(self, slug_or_id: str) -> Optional[BlogPost]:
        """Resolve by slug, then by id, and count one view on the post."""

    # Comment methods
    @abstractmethod
    def get_comments_by_post_id(self, post_id: str) -> List[Comment]:
        """Comments for a post, oldest first."""

    @abstractmethod
    def create_comment(self, data: CommentCreate) -> Comment:
        ...


class MemStorage(IStorage):
    """In-memory content store. Dict insertion order is the creation order."""

    def __init__(self, seed: bool = True, clock: Clock = datetime.utcnow):
        self._users: Dict[str, User] = {}
        self._posts: Dict[str, BlogPost] = {}
        self._comments: Dict[str, Comment] = {}
        self._clock = clock
        # Sync handlers run in a threadpool
        self._lock = threading.Lock()

        if seed:
            self._seed_data()

    def _seed_data(self):
        for entry in SEED_POSTS:
            post = _seed_post(entry)
            self._posts[post.id] = post
        logger.info(f"Seeded in-memory store with {len(SEED_POSTS)} posts")

    # User methods
    def get_user(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            user = next((user for user in self._users.values() if user.username == username), None)
        return user.model_copy() if user else None

    def create_user(self, data: UserCreate) -> User:
        user = User(id=str(uuid.uuid4()), username=data.username, password=hash_password(data.password))
        with self._lock:
            self._users[user.id] = user
        return user.model_copy()

    # Blog post methods
    def list_posts(
        self,
        published: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[BlogPost]:
        with self._lock:
            posts = list(self._posts.values())
        if published is not None:
            posts = [post for post in posts if post.published == published]
        posts.sort(key=lambda post: post.created_at, reverse=True)
        return [post.model_copy(deep=True) for post in paginate(posts, limit, offset)]

    def get_post(self, post_id: str) -> Optional[BlogPost]:
        post = self._posts.get(post_id)
        return post.model_copy(deep=True) if post else None

    def _find_by_slug(self, slug: str) -> Optional[BlogPost]:
        # Caller holds self._lock
        return next((post for post in self._posts.values() if post.slug == slug), None)

    def get_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        with self._lock:
            post = self._find_by_slug(slug)
        return post.model_copy(deep=True) if post else None

    def create_post(self, data: BlogPostCreate) -> BlogPost:
        post = build_new_post(data, self._clock())
        with self._lock:
            self._posts[post.id] = post
        logger.debug(f"Stored post {post.id}")
        return post.model_copy(deep=True)

    def update_post(self, post_id: str, data: BlogPostUpdate) -> Optional[BlogPost]:
        with self._lock:
            existing = self._posts.get(post_id)
            if existing is None:
                return None
            updated = apply_update(existing, data, self._clock())
            self._posts[post_id] = updated
        return updated.model_copy(deep=True)

    def delete_post(self, post_id: str) -> bool:
        with self._lock:
            return self._posts.pop(post_id, None) is not None

    def search_posts(self, query: str) -> List[BlogPost]:
        with self._lock:
            posts = list(self._posts.values())
        return [post.model_copy(deep=True) for post in posts if post_matches_query(post, query)]

    def fetch_and_record_view(self, slug_or_id: str) -> Optional[BlogPost]:
        with self._lock:
            post = self._find_by_slug(slug_or_id) or self._posts.get(slug_or_id)
            if post is None:
                return None
            metadata = post.metadata.model_copy(update={"views": post.metadata.views + 1})
            updated = post.model_copy(update={"metadata": metadata, "updated_at": self._clock()})
            self._posts[post.id] = updated
        return updated.model_copy(deep=True)

    # Comment methods
    def get_comments_by_post_id(self, post_id: str) -> List[Comment]:
        with self._lock:
            comments = [comment for comment in self._comments.values() if comment.post_id == post_id]
        comments.sort(key=lambda comment: comment.created_at)
        return [comment.model_copy() for comment in comments]

    def create_comment(self, data: CommentCreate) -> Comment:
        comment = Comment(id=str(uuid.uuid4()), created_at=self._clock(), **data.model_dump())
        with self._lock:
            self._comments[comment.id] = comment
        return comment.model_copy()


def _row_to_post(row: models.BlogPost) -> BlogPost:
    return BlogPost(
        id=row.id,
        title=row.title,
        slug=row.slug,
        content=row.content,
        excerpt=row.excerpt,
        featured_image=row.featured_image,
        tags=list(row.tags or []),
        published=row.published,
        metadata=BlogPostMetadata.model_validate(row.post_metadata or {}),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _write_post(row: models.BlogPost, post: BlogPost):
    row.id = post.id
    row.title = post.title
    row.slug = post.slug
    row.content = post.content
    row.excerpt = post.excerpt
    row.featured_image = post.featured_image
    row.tags = list(post.tags)
    row.published = post.published
    # Stored with the same camelCase keys the API returns
    row.post_metadata = post.metadata.model_dump(by_alias=True)
    row.created_at = post.created_at
    row.updated_at = post.updated_at


def _row_to_comment(row: models.Comment) -> Comment:
    return Comment(
        id=row.id,
        post_id=row.post_id,
        author=row.author,
        email=row.email,
        content=row.content,
        created_at=row.created_at,
    )


class DatabaseStorage(IStorage):
    """
    SQLAlchemy-backed content store.

    Each operation uses its own session. Counting a view reads, increments and
    writes the row inside one transaction, locking the row on databases that
    support SELECT ... FOR UPDATE.
    """

    def __init__(self, session_factory: sessionmaker, seed: bool = True, clock: Clock = datetime.utcnow):
        self._session_factory = session_factory
        self._clock = clock

        if seed:
            self.seed_if_empty()

    def seed_if_empty(self):
        """Insert the sample posts when the blog_posts table has no rows."""
        with self._session_factory() as db:
            if db.query(models.BlogPost).count() > 0:
                logger.info("Blog posts already present, skipping seed")
                return
            for entry in SEED_POSTS:
                row = models.BlogPost()
                _write_post(row, _seed_post(entry))
                db.add(row)
            db.commit()
        logger.info(f"Seeded database with {len(SEED_POSTS)} posts")

    def _post_row(self, db: Session, post_id: str, for_update: bool = False) -> Optional[models.BlogPost]:
        query = db.query(models.BlogPost).filter(models.BlogPost.id == post_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def _slug_row(self, db: Session, slug: str, for_update: bool = False) -> Optional[models.BlogPost]:
        query = (
            db.query(models.BlogPost)
            .filter(models.BlogPost.slug == slug)
            .order_by(models.BlogPost.seq.asc())
        )
        if for_update:
            query = query.with_for_update()
        return query.first()

    # User methods
    def get_user(self, user_id: str) -> Optional[User]:
        with self._session_factory() as db:
            row = db.query(models.User).filter(models.User.id == user_id).first()
            return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session_factory() as db:
            row = db.query(models.User).filter(models.User.username == username).first()
            return User.model_validate(row) if row else None

    def create_user(self, data: UserCreate) -> User:
        row = models.User(id=str(uuid.uuid4()), username=data.username, password=hash_password(data.password))
        with self._session_factory() as db:
            db.add(row)
            db.commit()
            return User.model_validate(row)

    # Blog post methods
    def list_posts(
        self,
        published: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> List[BlogPost]:
        with self._session_factory() as db:
            query = db.query(models.BlogPost)
            if published is not None:
                query = query.filter(models.BlogPost.published == published)
            query = query.order_by(models.BlogPost.created_at.desc(), models.BlogPost.seq.asc())
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return [_row_to_post(row) for row in query.all()]

    def get_post(self, post_id: str) -> Optional[BlogPost]:
        with self._session_factory() as db:
            row = self._post_row(db, post_id)
            return _row_to_post(row) if row else None

    def get_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        with self._session_factory() as db:
            row = self._slug_row(db, slug)
            return _row_to_post(row) if row else None

    def create_post(self, data: BlogPostCreate) -> BlogPost:
        post = build_new_post(data, self._clock())
        with self._session_factory() as db:
            row = models.BlogPost()
            _write_post(row, post)
            db.add(row)
            db.commit()
        logger.debug(f"Stored post {post.id}")
        return post

    def update_post(self, post_id: str, data: BlogPostUpdate) -> Optional[BlogPost]:
        with self._session_factory() as db:
            row = self._post_row(db, post_id, for_update=True)
            if row is None:
                return None
            updated = apply_update(_row_to_post(row), data, self._clock())
            _write_post(row, updated)
            db.commit()
            return updated

    def delete_post(self, post_id: str) -> bool:
        with self._session_factory() as db:
            deleted = db.query(models.BlogPost).filter(models.BlogPost.id == post_id).delete()
            db.commit()
            return deleted > 0

    def search_posts(self, query: str) -> List[BlogPost]:
        # Full-table scan; tags live in a JSON column
        with self._session_factory() as db:
            rows = db.query(models.BlogPost).order_by(models.BlogPost.seq.asc()).all()
            posts = [_row_to_post(row) for row in rows]
        return [post for post in posts if post_matches_query(post, query)]

    def fetch_and_record_view(self, slug_or_id: str) -> Optional[BlogPost]:
        with self._session_factory() as db:
            row = self._slug_row(db, slug_or_id, for_update=True)
            if row is None:
                row = self._post_row(db, slug_or_id, for_update=True)
            if row is None:
                return None
            post = _row_to_post(row)
            metadata = post.metadata.model_copy(update={"views": post.metadata.views + 1})
            updated = post.model_copy(update={"metadata": metadata, "updated_at": self._clock()})
            _write_post(row, updated)
            db.commit()
            return updated

    # Comment methods
    def get_comments_by_post_id(self, post_id: str) -> List[Comment]:
        with self._session_factory() as db:
            rows = (
                db.query(models.Comment)
                .filter(models.Comment.post_id == post_id)
                .order_by(models.Comment.created_at.asc(), models.Comment.seq.asc())
                .all()
            )
            return [_row_to_comment(row) for row in rows]

    def create_comment(self, data: CommentCreate) -> Comment:
        comment = Comment(id=str(uuid.uuid4()), created_at=self._clock(), **data.model_dump())
        with self._session_factory() as db:
            db.add(models.Comment(**comment.model_dump()))
            db.commit()
        return comment


def build_storage(backend: str, database_url: str, seed: bool = True) -> IStorage:
    """
    Construct the configured content store.

    Args:
        backend: "memory" or "database"
        database_url: SQLAlchemy URL, used by the database backend
        seed: Whether to load the sample posts

    Returns:
        IStorage: Ready-to-use store

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "memory":
        logger.info("Using in-memory content store")
        return MemStorage(seed=seed)

    if backend == "database":
        logger.info("Using database content store")
        engine = make_engine(database_url)
        init_db(engine)
        return DatabaseStorage(make_session_factory(engine), seed=seed)

    raise ValueError(f"STORAGE_BACKEND must be 'memory' or 'database', got '{backend}'")
