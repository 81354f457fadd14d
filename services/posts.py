import logging
from typing import List

from models.post import Comment, Like, Post
from models.user import UserProfile
from services import engagement
from services.errors import AuthError, NotFoundError
from services.firestore import FirestoreDB

logger = logging.getLogger(__name__)


class PostService:

    def __init__(self, db: FirestoreDB):
        self.db = db

    def _profile(self, user_id: str) -> UserProfile:
        profile = self.db.get_user_profile(user_id)
        if profile is None:
            raise AuthError("User not found")
        return profile

    def create_post(self, user_id: str, text: str) -> Post:
        """
        Create a post owned by the caller

        The author's display name and avatar are copied from their profile
        now and are not updated if the profile changes later.

        Args:
            user_id: The ID of the authenticated caller
            text: The post body

        Returns:
            The stored post with its generated ID
        """
        text = engagement.clean_text(text)
        profile = self._profile(user_id)

        post = Post(
            author=user_id,
            author_display_name=profile.display_name,
            author_avatar_ref=profile.avatar_ref,
            text=text,
            created_at=engagement.utc_now(),
        )
        post = self.db.create_post(post)
        logger.info("Post created: %s by user %s", post.id, user_id)
        return post

    def list_posts(self) -> List[Post]:
        return self.db.get_all_posts()

    def get_post(self, post_id: str) -> Post:
        post = self.db.get_post(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def delete_post(self, post_id: str, user_id: str) -> None:
        """Delete a post; only its author may do so"""
        self.db.delete_post(post_id, lambda post: engagement.check_owner(post, user_id))
        logger.info("Post removed: %s by user %s", post_id, user_id)

    def get_likes(self, post_id: str) -> List[Like]:
        return self.get_post(post_id).likes

    def like_post(self, post_id: str, user_id: str) -> List[Like]:
        return self.db.update_post(post_id, lambda post: engagement.add_like(post, user_id))

    def unlike_post(self, post_id: str, user_id: str) -> List[Like]:
        return self.db.update_post(post_id, lambda post: engagement.remove_like(post, user_id))

    def get_comments(self, post_id: str) -> List[Comment]:
        return self.get_post(post_id).comments

    def add_comment(self, post_id: str, user_id: str, text: str) -> List[Comment]:
        """
        Add a comment from the caller to the front of a post's comments

        The comment is stored as part of the post document.
        """
        text = engagement.clean_text(text)
        profile = self._profile(user_id)
        comment = engagement.new_comment(profile, text)

        comments = self.db.update_post(post_id, lambda post: engagement.add_comment(post, comment))
        logger.info("Comment %s added to post %s by user %s", comment.id, post_id, user_id)
        return comments

    def delete_comment(self, post_id: str, comment_id: str, user_id: str) -> List[Comment]:
        return self.db.update_post(
            post_id, lambda post: engagement.remove_comment(post, comment_id, user_id)
        )
