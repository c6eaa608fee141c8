"""
In-memory resource store for users and posts.

Records live for the process lifetime only. Route handlers and the auth
identity service reach the store through the Repository protocol, so any
backend offering find/insert/list can be swapped in via create_app().
"""
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Callable, Generic, Iterable, Optional, Protocol, TypeVar

from flask import current_app

from core.timestamps import now

# =============================================================================
# Records
# =============================================================================


@dataclass
class User:
    id: int
    username: str
    email: str
    password_hash: str

    @property
    def principal(self):
        # Import here to avoid circular dependency (auth facade imports the store)
        from webapi.auth.types import Principal
        return Principal(id=self.id, username=self.username, email=self.email)

    def to_public(self) -> dict:
        return {"id": self.id, "username": self.username, "email": self.email}


@dataclass
class Post:
    id: int
    title: str
    content: str
    author_id: int
    created_at: datetime = field(default_factory=now)
    updated_at: Optional[datetime] = None

    def to_dict(self, author: Optional[User] = None) -> dict:
        data = {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author_id": self.author_id,
            "created_at": self.created_at.isoformat(),
            "author": {"username": author.username, "email": author.email} if author else None,
        }
        if self.updated_at is not None:
            data["updated_at"] = self.updated_at.isoformat()
        return data


R = TypeVar("R")


# =============================================================================
# Repository
# =============================================================================


class Repository(Protocol[R]):
    """Storage interface the API depends on."""

    def find(self, record_id: int) -> Optional[R]: ...

    def find_where(self, predicate: Callable[[R], bool]) -> Optional[R]: ...

    def insert(self, record: R) -> R: ...

    def list(self) -> list[R]: ...

    def replace(self, record: R) -> R: ...

    def remove(self, record_id: int) -> Optional[R]: ...


class InMemoryRepository(Generic[R]):
    """Thread-safe list-backed repository with auto-increment ids.

    insert() assigns the next id to records whose id is 0.
    """

    def __init__(self, records: Iterable[R] = ()):
        self._lock = threading.Lock()
        self._records: list[R] = []
        self._next_id = 1
        for record in records:
            self.insert(record)

    def find(self, record_id: int) -> Optional[R]:
        with self._lock:
            return next((r for r in self._records if r.id == record_id), None)

    def find_where(self, predicate: Callable[[R], bool]) -> Optional[R]:
        with self._lock:
            return next((r for r in self._records if predicate(r)), None)

    def insert(self, record: R) -> R:
        with self._lock:
            if not record.id:
                record = replace(record, id=self._next_id)
            self._next_id = max(self._next_id, record.id + 1)
            self._records.append(record)
            return record

    def list(self) -> list[R]:
        with self._lock:
            return list(self._records)

    def replace(self, record: R) -> R:
        with self._lock:
            for i, existing in enumerate(self._records):
                if existing.id == record.id:
                    self._records[i] = record
                    return record
        raise KeyError(record.id)

    def remove(self, record_id: int) -> Optional[R]:
        with self._lock:
            for i, existing in enumerate(self._records):
                if existing.id == record_id:
                    return self._records.pop(i)
        return None


# =============================================================================
# Seed data
# =============================================================================

DEMO_USERNAME = "admin"
DEMO_EMAIL = "admin@example.com"
DEMO_PASSWORD = "password123"


def seed_demo_data(users: Repository[User], posts: Repository[Post]) -> None:
    """Insert the demo admin user and its two welcome posts."""
    from webapi.auth.passwords import hash_password

    admin = users.insert(User(
        id=0,
        username=DEMO_USERNAME,
        email=DEMO_EMAIL,
        password_hash=hash_password(DEMO_PASSWORD),
    ))
    posts.insert(Post(id=0, title="Welcome Post", content="Welcome to our API!", author_id=admin.id))
    posts.insert(Post(
        id=0,
        title="Security First",
        content="All POST operations are secured with JWT tokens.",
        author_id=admin.id,
    ))


# =============================================================================
# App accessors
# =============================================================================

def get_user_store() -> Repository[User]:
    """User repository bound to the current Flask app."""
    return current_app.extensions["user_store"]


def get_post_store() -> Repository[Post]:
    """Post repository bound to the current Flask app."""
    return current_app.extensions["post_store"]
