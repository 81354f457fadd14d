import pytest

from services.errors import AuthError, AuthorizationError, NotFoundError, StoreError


def test_author_snapshot_is_not_resynced(service, store):
    post = service.create_post("u1", "hello")

    store.add_user("u1", "alice-renamed", "new.png")

    stored = service.get_post(post.id)
    assert stored.author_display_name == "alice"
    assert stored.author_avatar_ref == "https://avatars.example.com/alice.png"


def test_comment_snapshot_uses_commenter_profile(service):
    post = service.create_post("u1", "hello")

    comments = service.add_comment(post.id, "u2", "<script>x</script>nice")

    assert comments[0].author_display_name == "bob"
    assert comments[0].author_avatar_ref is None
    assert "<script>" not in comments[0].text


def test_comment_from_unknown_user(service, store):
    post = service.create_post("u1", "hello")

    with pytest.raises(AuthError):
        service.add_comment(post.id, "ghost", "hi")

    assert service.get_comments(post.id) == []


def test_refused_delete_keeps_everything(service):
    post = service.create_post("u1", "hello")
    service.like_post(post.id, "u2")
    service.add_comment(post.id, "u3", "hi")

    with pytest.raises(AuthorizationError):
        service.delete_post(post.id, "u2")

    kept = service.get_post(post.id)
    assert [like.user_id for like in kept.likes] == ["u2"]
    assert [c.author for c in kept.comments] == ["u3"]


def test_delete_post(service):
    post = service.create_post("u1", "hello")

    service.delete_post(post.id, "u1")

    with pytest.raises(NotFoundError):
        service.get_post(post.id)
    assert service.list_posts() == []


def test_likes_from_several_users(service):
    post = service.create_post("u1", "hello")

    service.like_post(post.id, "u2")
    likes = service.like_post(post.id, "u3")

    assert [like.user_id for like in likes] == ["u3", "u2"]
    assert service.get_likes(post.id) == likes


def test_store_error_is_opaque(client, auth, store, monkeypatch, caplog):
    def broken():
        raise StoreError("deadline exceeded talking to projects/demo/databases")

    monkeypatch.setattr(store, "get_all_posts", broken)

    response = client.get("/posts", headers=auth("u1"))

    assert response.status_code == 500
    assert response.json() == {"msg": "Server Error"}
    assert "deadline exceeded" in caplog.text


def test_special_characters_are_stored_as_sent(service):
    text = "Tom & Jerry: 5 > 3 < 4"
    post = service.create_post("u1", text)

    service.add_comment(post.id, "u2", text)

    stored = service.get_post(post.id)
    assert stored.text == text
    assert stored.comments[0].text == text
