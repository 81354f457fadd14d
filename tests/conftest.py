import uuid
from typing import Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

import dependencies
from dependencies import get_firestore
from main import app
from models.post import Post
from models.user import UserProfile
from services.errors import NotFoundError
from services.firestore import is_valid_document_id
from services.posts import PostService


class InMemoryPostStore:
    """Stand-in for FirestoreDB that keeps documents in dicts"""

    def __init__(self):
        self.users: Dict[str, dict] = {}
        self.posts: Dict[str, dict] = {}

    def add_user(self, user_id: str, username: str, profile_icon: Optional[str] = None):
        self.users[user_id] = {"username": username, "profileIcon": profile_icon}

    def get_user_profile(self, user_id: str) -> Optional[UserProfile]:
        data = self.users.get(user_id)
        if data is None:
            return None
        return UserProfile(
            user_id=user_id,
            display_name=data.get("username") or "Unknown",
            avatar_ref=data.get("profileIcon"),
        )

    def get_all_posts(self) -> List[Post]:
        posts = [Post.from_document(doc_id, data) for doc_id, data in self.posts.items()]
        return sorted(posts, key=lambda post: post.created_at, reverse=True)

    def get_post(self, post_id: str) -> Optional[Post]:
        if not is_valid_document_id(post_id):
            raise NotFoundError("Post not found")
        data = self.posts.get(post_id)
        if data is None:
            return None
        return Post.from_document(post_id, data)

    def create_post(self, post: Post) -> Post:
        post_id = uuid.uuid4().hex[:20]
        self.posts[post_id] = post.to_document()
        return post.model_copy(update={"id": post_id})

    def update_post(self, post_id: str, mutate: Callable):
        post = self.get_post(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        result = mutate(post)
        self.posts[post_id] = post.to_document()
        return result

    def delete_post(self, post_id: str, check: Callable) -> None:
        post = self.get_post(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        check(post)
        del self.posts[post_id]


def fake_verify_id_token(token, check_revoked=False, clock_skew_seconds=0):
    if not token.startswith("token-"):
        raise ValueError("Token could not be decoded")
    uid = token[len("token-"):]
    return {"uid": uid, "email": f"{uid}@example.com"}


@pytest.fixture
def auth():
    """Authorization headers for a user id"""
    def headers(user_id: str) -> dict:
        return {"Authorization": f"Bearer token-{user_id}"}
    return headers


@pytest.fixture
def store():
    store = InMemoryPostStore()
    store.add_user("u1", "alice", "https://avatars.example.com/alice.png")
    store.add_user("u2", "bob")
    store.add_user("u3", "carol")
    return store


@pytest.fixture
def service(store):
    return PostService(store)


@pytest.fixture
def client(store, monkeypatch):
    monkeypatch.setattr(dependencies, "verify_id_token", fake_verify_id_token)
    app.dependency_overrides[get_firestore] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
