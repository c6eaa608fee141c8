"""Tests for the in-memory resource store."""

import threading

import pytest

from webapi.store import (
    DEMO_EMAIL,
    DEMO_USERNAME,
    InMemoryRepository,
    Post,
    User,
    seed_demo_data,
)


def _user(username, id=0):
    return User(id=id, username=username, email=f"{username}@example.com", password_hash="h")


class TestInMemoryRepository:
    def test_insert_assigns_sequential_ids(self):
        repo = InMemoryRepository()
        assert repo.insert(_user("a")).id == 1
        assert repo.insert(_user("b")).id == 2

    def test_explicit_id_advances_counter(self):
        repo = InMemoryRepository()
        repo.insert(_user("a", id=10))
        assert repo.insert(_user("b")).id == 11

    def test_find(self):
        repo = InMemoryRepository([_user("a"), _user("b")])
        assert repo.find(2).username == "b"
        assert repo.find(3) is None

    def test_find_where(self):
        repo = InMemoryRepository([_user("a"), _user("b")])
        assert repo.find_where(lambda u: u.username == "b").id == 2
        assert repo.find_where(lambda u: u.username == "z") is None

    def test_list_is_a_copy(self):
        repo = InMemoryRepository([_user("a")])
        listed = repo.list()
        listed.clear()
        assert len(repo.list()) == 1

    def test_replace(self):
        repo = InMemoryRepository([_user("a")])
        repo.replace(User(id=1, username="a2", email="a2@example.com", password_hash="h"))
        assert repo.find(1).username == "a2"

    def test_replace_missing_raises(self):
        with pytest.raises(KeyError):
            InMemoryRepository().replace(_user("a", id=5))

    def test_remove(self):
        repo = InMemoryRepository([_user("a")])
        assert repo.remove(1).username == "a"
        assert repo.remove(1) is None
        assert repo.list() == []

    def test_ids_not_reused_after_remove(self):
        repo = InMemoryRepository([_user("a"), _user("b")])
        repo.remove(2)
        assert repo.insert(_user("c")).id == 3

    def test_concurrent_inserts_get_unique_ids(self):
        repo = InMemoryRepository()

        def worker(n):
            for i in range(50):
                repo.insert(_user(f"u{n}-{i}"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        ids = [u.id for u in repo.list()]
        assert len(ids) == 200
        assert len(set(ids)) == 200


class TestRecords:
    def test_user_public_view(self):
        user = _user("a", id=3)
        assert user.to_public() == {"id": 3, "username": "a", "email": "a@example.com"}
        assert user.principal.id == 3

    def test_post_to_dict(self):
        post = Post(id=1, title="T", content="C", author_id=3)
        data = post.to_dict(_user("a", id=3))
        assert data["author"] == {"username": "a", "email": "a@example.com"}
        assert data["created_at"].endswith("+00:00")
        assert "updated_at" not in data

    def test_post_without_author(self):
        assert Post(id=1, title="T", content="C", author_id=9).to_dict()["author"] is None


class TestSeedDemoData:
    def test_seed(self):
        users, posts = InMemoryRepository(), InMemoryRepository()
        seed_demo_data(users, posts)
        admin = users.find(1)
        assert admin.username == DEMO_USERNAME
        assert admin.email == DEMO_EMAIL
        assert [p.title for p in posts.list()] == ["Welcome Post", "Security First"]
        assert all(p.author_id == 1 for p in posts.list())
