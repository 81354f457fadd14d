import logging
import re
from typing import Callable, List, Optional, TypeVar

import firebase_admin
from firebase_admin import firestore as fs
from google.api_core.exceptions import GoogleAPICallError, InvalidArgument
from google.cloud import firestore

from models.post import Post
from models.user import UserProfile
from services.errors import NotFoundError, StoreError

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Firestore rejects ids with slashes, "." / "..", and the reserved __name__ form
_RESERVED_ID = re.compile(r"^__.*__$")
_MAX_ID_BYTES = 1500


def is_valid_document_id(doc_id: str) -> bool:
    if not doc_id or "/" in doc_id or doc_id in (".", ".."):
        return False
    if _RESERVED_ID.match(doc_id):
        return False
    return len(doc_id.encode("utf-8")) <= _MAX_ID_BYTES


class FirestoreDB:
    """
    Post store backed by Firestore.

    Posts live in the ``posts`` collection with their likes and comments
    embedded in the document. Profiles are read from ``users``.
    """

    def __init__(self, app: firebase_admin.App):
        self.db = fs.client(app)

    def collection(self, name: str):
        return self.db.collection(name)

    def _post_ref(self, post_id: str):
        if not is_valid_document_id(post_id):
            raise NotFoundError("Post not found")
        return self.collection("posts").document(post_id)

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get the display name and avatar for a user, None if no profile exists"""
        if not is_valid_document_id(user_id):
            return None
        try:
            snapshot = self.collection("users").document(user_id).get()
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to read profile {user_id}: {e}") from e

        if not snapshot.exists:
            return None

        data = snapshot.to_dict()
        return UserProfile(
            user_id=user_id,
            display_name=data.get("username") or "Unknown",
            avatar_ref=data.get("profileIcon"),
        )

    def get_all_posts(self) -> List[Post]:
        """Get all posts sorted by creation date descending"""
        try:
            posts_ref = self.collection("posts").order_by(
                "createdAt", direction=firestore.Query.DESCENDING
            ).stream()
            return [Post.from_document(doc.id, doc.to_dict()) for doc in posts_ref]
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to list posts: {e}") from e

    def get_post(self, post_id: str) -> Optional[Post]:
        """Get a post by ID, None if it does not exist"""
        post_ref = self._post_ref(post_id)
        try:
            snapshot = post_ref.get()
        except InvalidArgument:
            return None
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to read post {post_id}: {e}") from e

        if not snapshot.exists:
            return None
        return Post.from_document(snapshot.id, snapshot.to_dict())

    def create_post(self, post: Post) -> Post:
        """Store a new post under a generated id and return it with the id set"""
        new_post_ref = self.collection("posts").document()
        try:
            new_post_ref.set(post.to_document())
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to create post: {e}") from e
        return post.model_copy(update={"id": new_post_ref.id})

    def update_post(self, post_id: str, mutate: Callable[[Post], T]) -> T:
        """
        Read a post, apply ``mutate`` to it and write it back in one transaction

        Firestore retries the function when the document changed underneath
        it. If ``mutate`` raises, nothing is written.

        Returns:
            Whatever ``mutate`` returns

        Raises:
            NotFoundError: If the post does not exist
        """
        post_ref = self._post_ref(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def update_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise NotFoundError("Post not found")

            post = Post.from_document(snapshot.id, snapshot.to_dict())
            result = mutate(post)
            transaction.set(post_ref, post.to_document())
            return result

        try:
            return update_in_transaction(transaction, post_ref)
        except InvalidArgument as e:
            raise NotFoundError("Post not found") from e
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to update post {post_id}: {e}") from e

    def delete_post(self, post_id: str, check: Callable[[Post], None]) -> None:
        """
        Delete a post along with its embedded likes and comments

        ``check`` runs against the current post inside the transaction and
        may raise to refuse the delete.
        """
        post_ref = self._post_ref(post_id)
        transaction = self.db.transaction()

        @firestore.transactional
        def delete_in_transaction(transaction, post_ref):
            snapshot = post_ref.get(transaction=transaction)
            if not snapshot.exists:
                raise NotFoundError("Post not found")

            check(Post.from_document(snapshot.id, snapshot.to_dict()))
            transaction.delete(post_ref)

        try:
            delete_in_transaction(transaction, post_ref)
        except InvalidArgument as e:
            raise NotFoundError("Post not found") from e
        except GoogleAPICallError as e:
            raise StoreError(f"Failed to delete post {post_id}: {e}") from e
