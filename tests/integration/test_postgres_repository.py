"""
Integration tests for the PostgreSQL repositories.

Tests repository operations against a real PostgreSQL database.
Requires DATABASE_URL to point at a running PostgreSQL; skipped otherwise.
"""

import os
from concurrent.futures import ThreadPoolExecutor

import pytest
from psycopg_pool import ConnectionPool

from postboard.adapters.repository.postgres import (
    PostgresPostRepository,
    PostgresUserRepository,
    run_migrations,
)

pytestmark = [
    pytest.mark.postgres,
    pytest.mark.skipif(not os.environ.get("DATABASE_URL"), reason="DATABASE_URL not set"),
]


@pytest.fixture(scope="module")
def pool() -> ConnectionPool:
    """Create connection pool and schema for integration tests."""
    pool = ConnectionPool(
        conninfo=os.environ["DATABASE_URL"],
        min_size=1,
        max_size=10,
        open=True,
    )
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> None:
    """Clean tables before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM posts")
        conn.execute("DELETE FROM users")
        conn.commit()
    yield


@pytest.fixture
def users(pool: ConnectionPool) -> PostgresUserRepository:
    return PostgresUserRepository(pool)


@pytest.fixture
def posts(pool: ConnectionPool) -> PostgresPostRepository:
    return PostgresPostRepository(pool)


def _add_user(users: PostgresUserRepository, email: str = "alice@example.com"):
    return users.add(name="Alice", email=email, password_hash="$2b$04$hash", bio="bio", active=False)


class TestPostgresUserRepository:
    """Tests for PostgresUserRepository."""

    def test_add_and_get(self, users: PostgresUserRepository) -> None:
        user = _add_user(users)

        assert user is not None
        assert users.get(user.id) == user
        assert user.active is False

    def test_duplicate_email_returns_none(self, users: PostgresUserRepository) -> None:
        assert _add_user(users) is not None
        assert _add_user(users) is None

    def test_concurrent_duplicate_registration_exactly_one_succeeds(self, users: PostgresUserRepository) -> None:
        with ThreadPoolExecutor(max_workers=5) as executor:
            results = list(executor.map(lambda _: _add_user(users), range(5)))

        assert sum(r is not None for r in results) == 1

    def test_find_by_email(self, users: PostgresUserRepository) -> None:
        user = _add_user(users)
        assert users.find_by_email("alice@example.com") == user
        assert users.find_by_email("bob@example.com") is None

    def test_activate(self, users: PostgresUserRepository) -> None:
        user = _add_user(users)
        assert users.activate(user.id).active is True
        assert users.get(user.id).active is True

    def test_activate_missing_returns_none(self, users: PostgresUserRepository) -> None:
        assert users.activate("f" * 24) is None

    def test_ping(self, users: PostgresUserRepository) -> None:
        users.ping()


class TestPostgresPostRepository:
    """Tests for PostgresPostRepository."""

    def test_add_sets_defaults(self, posts: PostgresPostRepository) -> None:
        post = posts.add(title="Hello World", text="Some text body", author="alice")

        assert post.status == "draft"
        assert post.views == 0
        assert posts.get(post.id) == post

    def test_list_all(self, posts: PostgresPostRepository) -> None:
        first = posts.add(title="Hello World", text="Some text body", author="alice")
        second = posts.add(title="Second post", text="More text here", author="bob")

        assert {p.id for p in posts.list_all()} == {first.id, second.id}

    def test_update(self, posts: PostgresPostRepository) -> None:
        post = posts.add(title="Hello World", text="Some text body", author="alice")

        updated = posts.update(post.id, {"title": "Renamed post", "status": "published"})

        assert updated.title == "Renamed post"
        assert updated.status == "published"

    def test_update_rejects_unknown_columns(self, posts: PostgresPostRepository) -> None:
        post = posts.add(title="Hello World", text="Some text body", author="alice")
        with pytest.raises(ValueError):
            posts.update(post.id, {"id; DROP TABLE posts": "x"})

    def test_update_missing_returns_none(self, posts: PostgresPostRepository) -> None:
        assert posts.update("f" * 24, {"title": "Renamed post"}) is None

    def test_delete(self, posts: PostgresPostRepository) -> None:
        post = posts.add(title="Hello World", text="Some text body", author="alice")

        assert posts.delete(post.id) is True
        assert posts.delete(post.id) is False
        assert posts.get(post.id) is None

    def test_concurrent_views_are_not_lost(self, posts: PostgresPostRepository) -> None:
        post = posts.add(title="Hello World", text="Some text body", author="alice")

        with ThreadPoolExecutor(max_workers=10) as executor:
            list(executor.map(lambda _: posts.increment_views(post.id), range(50)))

        assert posts.get(post.id).views == 50

    def test_increment_missing_returns_none(self, posts: PostgresPostRepository) -> None:
        assert posts.increment_views("f" * 24) is None
