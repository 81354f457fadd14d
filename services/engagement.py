"""
Rules for the likes and comments embedded in a single post.

Each rule checks its precondition first and raises before touching the
post, so a refused operation leaves the post exactly as it was. Callers
persist the post only after the rule returns.
"""
import html
import uuid
from datetime import datetime, timezone
from typing import List

import bleach

from models.post import Comment, Like, Post
from models.user import UserProfile
from services.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def clean_text(text: str) -> str:
    """
    Strip markup and surrounding whitespace from user supplied text

    bleach escapes the characters it leaves behind; they are unescaped again
    so the stored text matches what was sent.

    Raises:
        ValidationError: If nothing is left after cleaning
    """
    sanitized_text = html.unescape(bleach.clean(text or "", strip=True)).strip()
    if not sanitized_text:
        raise ValidationError("Text is required")
    return sanitized_text


def has_liked(post: Post, user_id: str) -> bool:
    return any(like.user_id == user_id for like in post.likes)


def add_like(post: Post, user_id: str) -> List[Like]:
    """Put the user's like at the front of the post's likes"""
    if has_liked(post, user_id):
        raise ConflictError("Post already liked")

    post.likes.insert(0, Like(user_id=user_id))
    return post.likes


def remove_like(post: Post, user_id: str) -> List[Like]:
    """Remove the user's like from the post"""
    if not has_liked(post, user_id):
        raise ConflictError("Post has not yet been liked")

    remove_index = [like.user_id for like in post.likes].index(user_id)
    del post.likes[remove_index]
    return post.likes


def new_comment(profile: UserProfile, text: str) -> Comment:
    return Comment(
        id=uuid.uuid4().hex,
        author=profile.user_id,
        author_display_name=profile.display_name,
        author_avatar_ref=profile.avatar_ref,
        text=text,
        created_at=utc_now(),
    )


def add_comment(post: Post, comment: Comment) -> List[Comment]:
    post.comments.insert(0, comment)
    return post.comments


def remove_comment(post: Post, comment_id: str, user_id: str) -> List[Comment]:
    """
    Remove a comment by its id

    Only the comment's own author may remove it; owning the post is not enough.
    """
    comment = next((c for c in post.comments if c.id == comment_id), None)
    if comment is None:
        raise NotFoundError("Comment not found")

    if comment.author != user_id:
        raise AuthorizationError("User not authorized")

    remove_index = [c.id for c in post.comments].index(comment_id)
    del post.comments[remove_index]
    return post.comments


def check_owner(post: Post, user_id: str) -> None:
    if post.author != user_id:
        raise AuthorizationError("User not authorized")
