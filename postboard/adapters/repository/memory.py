"""
In-memory repository adapters - Implement the repository protocols.

Process-local document store used when no DATABASE_URL is configured.
Nothing is durable: all records vanish when the process exits.

Each repository guards its dict with a lock so that single-record
operations (including increment_views) stay atomic when the store is
called from several threads, for example a worker thread pool. Stored records are copied on the way
in and out so callers never mutate store state directly.
"""

import threading
from dataclasses import replace
from typing import Any

from postboard.domain.entities import Post, User, utcnow
from postboard.domain.identifiers import new_identifier


class InMemoryUserRepository:
    """
    Implements UserRepository protocol with a dict keyed by identifier.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self) -> None:
        self._users: dict[str, User] = {}
        self._lock = threading.Lock()

    def add(self, name: str, email: str, password_hash: str, bio: str | None, active: bool) -> User | None:
        with self._lock:
            if any(u.email == email for u in self._users.values()):
                return None
            user = User(
                id=new_identifier(),
                name=name,
                email=email,
                password_hash=password_hash,
                bio=bio,
                active=active,
            )
            self._users[user.id] = user
            return replace(user)

    def get(self, user_id: str) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user is not None else None

    def find_by_email(self, email: str) -> User | None:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return replace(user)
            return None

    def activate(self, user_id: str) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            user.active = True
            return replace(user)

    def ping(self) -> None:
        return None


class InMemoryPostRepository:
    """Implements PostRepository protocol with a dict keyed by identifier."""

    def __init__(self) -> None:
        self._posts: dict[str, Post] = {}
        self._lock = threading.Lock()

    def add(self, title: str, text: str, author: str) -> Post:
        now = utcnow()
        post = Post(
            id=new_identifier(),
            title=title,
            text=text,
            author=author,
            created_at=now,
            updated_at=now,
        )
        with self._lock:
            self._posts[post.id] = post
            return replace(post)

    def get(self, post_id: str) -> Post | None:
        with self._lock:
            post = self._posts.get(post_id)
            return replace(post) if post is not None else None

    def list_all(self) -> list[Post]:
        with self._lock:
            return [replace(p) for p in self._posts.values()]

    def update(self, post_id: str, changes: dict[str, Any]) -> Post | None:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                return None
            updated = replace(post, **changes)
            self._posts[post_id] = updated
            return replace(updated)

    def delete(self, post_id: str) -> bool:
        with self._lock:
            return self._posts.pop(post_id, None) is not None

    def increment_views(self, post_id: str) -> Post | None:
        with self._lock:
            post = self._posts.get(post_id)
            if post is None:
                return None
            post.views += 1
            return replace(post)
