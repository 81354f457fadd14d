from typing import List, Dict

from fastapi import APIRouter

from dependencies import CurrentUser, Posts
from models.post import Comment, CommentRequest, Like, Post, PostCreate

router = APIRouter()


@router.post("")
def create_post(post_data: PostCreate, posts: Posts, current_user: CurrentUser) -> Post:
    """Create a new post"""
    return posts.create_post(current_user.user_id, post_data.text)


@router.get("")
def get_posts(posts: Posts, current_user: CurrentUser) -> List[Post]:
    """Get all posts, newest first"""
    return posts.list_posts()


@router.put("/like/{post_id}")
def like_post(post_id: str, posts: Posts, current_user: CurrentUser) -> List[Like]:
    """Like a post. Liking the same post twice is an error."""
    return posts.like_post(post_id, current_user.user_id)


@router.put("/unlike/{post_id}")
def unlike_post(post_id: str, posts: Posts, current_user: CurrentUser) -> List[Like]:
    """Remove the caller's like from a post"""
    return posts.unlike_post(post_id, current_user.user_id)


@router.get("/like/{post_id}")
def get_likes(post_id: str, posts: Posts, current_user: CurrentUser) -> List[Like]:
    return posts.get_likes(post_id)


@router.post("/comment/{post_id}")
def add_comment(
        post_id: str,
        comment: CommentRequest,
        posts: Posts,
        current_user: CurrentUser
) -> List[Comment]:
    """Comment on a post"""
    return posts.add_comment(post_id, current_user.user_id, comment.text)


@router.get("/comment/{post_id}")
def get_comments(post_id: str, posts: Posts, current_user: CurrentUser) -> List[Comment]:
    return posts.get_comments(post_id)


@router.delete("/comment/{post_id}/{comment_id}")
def delete_comment(
        post_id: str,
        comment_id: str,
        posts: Posts,
        current_user: CurrentUser
) -> List[Comment]:
    """
    Delete a comment

    Args:
        post_id: The post the comment belongs to
        comment_id: The comment to delete, must be authored by the caller
    """
    return posts.delete_comment(post_id, comment_id, current_user.user_id)


@router.get("/{post_id}")
def get_post(post_id: str, posts: Posts, current_user: CurrentUser) -> Post:
    """Get a post by ID"""
    return posts.get_post(post_id)


@router.delete("/{post_id}")
def delete_post(post_id: str, posts: Posts, current_user: CurrentUser) -> Dict[str, str]:
    """Delete a post and everything embedded in it"""
    posts.delete_post(post_id, current_user.user_id)
    return {"msg": "Post removed"}
