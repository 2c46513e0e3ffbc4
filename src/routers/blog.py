"""Blog router for managing blog posts and their comments."""

import logging
from typing import List, Optional
from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from src.dependencies import get_object_storage, get_storage
from src.object_storage import ObjectStorageService
from src.schemas import (
    BlogPost,
    BlogPostCreate,
    BlogPostUpdate,
    Comment,
    CommentCreate,
    FeaturedImageRequest,
    FeaturedImageResponse,
)
from src.storage import IStorage

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blog-posts", tags=["Blog"])


def parse_published(value: Optional[str]) -> Optional[bool]:
    """Map the published query string to a filter: "true", "false" or no filter."""
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_position(value: Optional[str]) -> Optional[int]:
    """Parse a limit or offset. Values that are not positive integers mean "not given"."""
    try:
        number = int(value) if value is not None else None
    except ValueError:
        return None
    return number if number and number > 0 else None


# GET /api/blog-posts
@router.get("", response_model=List[BlogPost])
def list_posts(
    published: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    storage: IStorage = Depends(get_storage),
):
    """
    List blog posts, or search them when a search term is given.

    Args:
        published: "true" or "false" to filter on status
        limit: Maximum number of posts to return, ignored unless positive
        offset: Number of posts to skip, ignored unless positive
        search: Case-insensitive substring to look for
        storage: Content store

    Returns:
        List[BlogPost]: Posts newest first, or search hits in insertion order

    Raises:
        HTTPException: If the store fails
    """
    published_filter = parse_published(published)
    limit = parse_position(limit)
    offset = parse_position(offset)

    try:
        if search:
            logger.info(f"Searching blog posts for: {search}")
            posts = storage.search_posts(search)
            if published_filter is not None:
                posts = [post for post in posts if post.published == published_filter]
        else:
            logger.info(f"Fetching blog posts (published={published_filter}, limit={limit}, offset={offset})")
            posts = storage.list_posts(published=published_filter, limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"Error fetching blog posts: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch blog posts"
        )

    logger.info(f"Found {len(posts)} blog posts")
    return posts


# GET /api/blog-posts/{slug_or_id}
@router.get("/{slug_or_id}", response_model=BlogPost)
def get_post(slug_or_id: str, storage: IStorage = Depends(get_storage)):
    """
    Get a single blog post by slug or id and count the view.

    Every successful call increments metadata.views by one, so this GET is
    not idempotent.

    Args:
        slug_or_id: Post slug, or post id when no slug matches
        storage: Content store

    Returns:
        BlogPost: The post with its updated view count

    Raises:
        HTTPException: If no post matches
    """
    logger.info(f"Fetching blog post {slug_or_id}")

    try:
        post = storage.fetch_and_record_view(slug_or_id)
    except Exception as e:
        logger.error(f"Error fetching blog post {slug_or_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch blog post"
        )

    if post is None:
        logger.warning(f"Blog post not found: {slug_or_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )

    return post


# POST /api/blog-posts
@router.post("", response_model=BlogPost, status_code=status.HTTP_201_CREATED)
def create_post(data: BlogPostCreate, storage: IStorage = Depends(get_storage)):
    """
    Create a new blog post. The slug is derived from the title when omitted.

    Args:
        data: Validated post data
        storage: Content store

    Returns:
        BlogPost: Created post
    """
    logger.info(f"Creating new blog post: {data.title}")

    try:
        post = storage.create_post(data)
    except Exception as e:
        logger.error(f"Error creating blog post: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create blog post"
        )

    logger.info(f"Blog post created successfully: {post.id} ({post.slug})")
    return post


# PUT /api/blog-posts/{post_id}
@router.put("/{post_id}", response_model=BlogPost)
def update_post(post_id: str, data: BlogPostUpdate, storage: IStorage = Depends(get_storage)):
    """
    Apply a partial update to a blog post.

    Args:
        post_id: Blog post ID
        data: Fields to update
        storage: Content store

    Returns:
        BlogPost: Updated post

    Raises:
        HTTPException: If post not found
    """
    logger.info(f"Updating blog post {post_id}")

    try:
        post = storage.update_post(post_id, data)
    except Exception as e:
        logger.error(f"Error updating blog post {post_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update blog post"
        )

    if post is None:
        logger.warning(f"Blog post not found: {post_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )

    logger.info(f"Blog post {post_id} updated successfully")
    return post


# DELETE /api/blog-posts/{post_id}
@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_post(post_id: str, storage: IStorage = Depends(get_storage)):
    """Delete a blog post permanently. Its comments are left in place."""
    logger.info(f"Deleting blog post {post_id}")

    if not storage.delete_post(post_id):
        logger.warning(f"Blog post not found: {post_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )

    logger.info(f"Blog post {post_id} deleted")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# PUT /api/blog-posts/{post_id}/featured-image
@router.put("/{post_id}/featured-image", response_model=FeaturedImageResponse)
def set_featured_image(
    post_id: str,
    data: FeaturedImageRequest,
    storage: IStorage = Depends(get_storage),
    object_storage: ObjectStorageService = Depends(get_object_storage),
):
    """
    Point a post's featured image at an uploaded object.

    Args:
        post_id: Blog post ID
        data: Request carrying the upload URL as imageURL
        storage: Content store
        object_storage: Object storage adapter

    Returns:
        FeaturedImageResponse: Normalized object path and the updated post

    Raises:
        HTTPException: If imageURL is missing or the post is not found
    """
    if not data.image_url:
        logger.warning(f"Featured image update without imageURL for post {post_id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="imageURL is required"
        )

    try:
        object_path = object_storage.normalize_object_entity_path(data.image_url)
        post = storage.update_post(post_id, BlogPostUpdate(featured_image=object_path))
    except Exception as e:
        logger.error(f"Error setting featured image for post {post_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error"
        )

    if post is None:
        logger.warning(f"Blog post not found: {post_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found"
        )

    logger.info(f"Featured image for post {post_id} set to {object_path}")
    return FeaturedImageResponse(object_path=object_path, post=post)


# GET /api/blog-posts/{post_id}/comments
@router.get("/{post_id}/comments", response_model=List[Comment])
def list_comments(post_id: str, storage: IStorage = Depends(get_storage)):
    """List the comments on a post, oldest first."""
    try:
        comments = storage.get_comments_by_post_id(post_id)
    except Exception as e:
        logger.error(f"Error fetching comments for post {post_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments"
        )

    logger.info(f"Found {len(comments)} comments for post {post_id}")
    return comments


# POST /api/blog-posts/{post_id}/comments
@router.post("/{post_id}/comments", response_model=Comment, status_code=status.HTTP_201_CREATED)
def create_comment(post_id: str, payload: dict = Body(...), storage: IStorage = Depends(get_storage)):
    """
    Add a comment to a post. The post id is taken from the path.

    Args:
        post_id: Blog post ID (not checked for existence)
        payload: Comment fields: author, email, content
        storage: Content store

    Returns:
        Comment: Created comment

    Raises:
        RequestValidationError: If the comment data is invalid
    """
    try:
        data = CommentCreate.model_validate({**payload, "postId": post_id})
    except ValidationError as e:
        logger.warning(f"Invalid comment data for post {post_id}")
        raise RequestValidationError(e.errors(include_url=False, include_context=False))

    try:
        comment = storage.create_comment(data)
    except Exception as e:
        logger.error(f"Error creating comment for post {post_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create comment"
        )

    logger.info(f"Comment {comment.id} created for post {post_id}")
    return comment
