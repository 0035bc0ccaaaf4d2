"""
PostgreSQL repository adapters - Implement the repository protocols.

This module provides PostgreSQL implementations of the domain's
repository ports using psycopg3 with raw SQL. Selected when
DATABASE_URL is configured.

Atomicity:
- Email uniqueness is enforced by a UNIQUE constraint; registration uses
  INSERT ... ON CONFLICT DO NOTHING so concurrent duplicates cannot both win.
- View counting is a single UPDATE ... SET views = views + 1 RETURNING,
  so concurrent views never overwrite each other.
"""

import logging
from pathlib import Path
from typing import Any

import psycopg
from psycopg import sql
from psycopg_pool import ConnectionPool

from postboard.domain.entities import POST_FIELDS, Post, User
from postboard.domain.identifiers import new_identifier

logger = logging.getLogger(__name__)

# postboard/adapters/repository/postgres.py -> <repo root>/migrations
MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"

_USER_COLUMNS = "id, name, email, password_hash, bio, active, created_at"
_POST_COLUMNS = "id, title, text, author, status, views, created_at, updated_at"


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        name=row[1],
        email=row[2],
        password_hash=row[3],
        bio=row[4],
        active=row[5],
        created_at=row[6],
    )


def _row_to_post(row: tuple) -> Post:
    return Post(
        id=row[0],
        title=row[1],
        text=row[2],
        author=row[3],
        status=row[4],
        views=row[5],
        created_at=row[6],
        updated_at=row[7],
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def add(self, name: str, email: str, password_hash: str, bio: str | None, active: bool) -> User | None:
        """
        Insert a user, or return None if the email is taken.

        The UNIQUE constraint on email makes the check atomic.
        """
        query = f"""
            INSERT INTO users (id, name, email, password_hash, bio, active, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, NOW())
            ON CONFLICT (email) DO NOTHING
            RETURNING {_USER_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (new_identifier(), name, email, password_hash, bio, active))
            row = cursor.fetchone()
            conn.commit()
            return _row_to_user(row) if row is not None else None

    def get(self, user_id: str) -> User | None:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = %s", (user_id,))
            row = cursor.fetchone()
            return _row_to_user(row) if row is not None else None

    def find_by_email(self, email: str) -> User | None:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE email = %s", (email,))
            row = cursor.fetchone()
            return _row_to_user(row) if row is not None else None

    def activate(self, user_id: str) -> User | None:
        query = f"UPDATE users SET active = TRUE WHERE id = %s RETURNING {_USER_COLUMNS}"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (user_id,))
            row = cursor.fetchone()
            conn.commit()
            return _row_to_user(row) if row is not None else None

    def ping(self) -> None:
        with self._pool.connection() as conn:
            conn.execute("SELECT 1")


class PostgresPostRepository:
    """Implements PostRepository protocol via psycopg3."""

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool

    def add(self, title: str, text: str, author: str) -> Post:
        query = f"""
            INSERT INTO posts (id, title, text, author, status, views, created_at, updated_at)
            VALUES (%s, %s, %s, %s, 'draft', 0, NOW(), NOW())
            RETURNING {_POST_COLUMNS}
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (new_identifier(), title, text, author))
            row = cursor.fetchone()
            conn.commit()
            return _row_to_post(row)

    def get(self, post_id: str) -> Post | None:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(f"SELECT {_POST_COLUMNS} FROM posts WHERE id = %s", (post_id,))
            row = cursor.fetchone()
            return _row_to_post(row) if row is not None else None

    def list_all(self) -> list[Post]:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(f"SELECT {_POST_COLUMNS} FROM posts ORDER BY created_at, id")
            return [_row_to_post(row) for row in cursor.fetchall()]

    def update(self, post_id: str, changes: dict[str, Any]) -> Post | None:
        """
        Overwrite the given columns of one post.

        Column names come from Post attributes and are quoted with
        sql.Identifier; unknown names are rejected before building SQL.
        """
        unknown = set(changes) - set(POST_FIELDS)
        if unknown:
            raise ValueError(f"Unknown post fields: {sorted(unknown)}")
        if not changes:
            return self.get(post_id)

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = %s").format(sql.Identifier(name)) for name in changes
        )
        query = sql.SQL("UPDATE posts SET {} WHERE id = %s RETURNING {}").format(
            assignments, sql.SQL(_POST_COLUMNS)
        )

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (*changes.values(), post_id))
            row = cursor.fetchone()
            conn.commit()
            return _row_to_post(row) if row is not None else None

    def delete(self, post_id: str) -> bool:
        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute("DELETE FROM posts WHERE id = %s", (post_id,))
            conn.commit()
            return cursor.rowcount == 1

    def increment_views(self, post_id: str) -> Post | None:
        query = f"UPDATE posts SET views = views + 1 WHERE id = %s RETURNING {_POST_COLUMNS}"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, (post_id,))
            row = cursor.fetchone()
            conn.commit()
            return _row_to_post(row) if row is not None else None


def run_migrations(pool: ConnectionPool, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
    """
    Apply the users and posts schema.

    Every *.sql file in migrations_dir runs on each startup, in filename
    order, each inside its own transaction on one connection. Scripts must
    be idempotent (CREATE ... IF NOT EXISTS).

    Returns:
        Names of the scripts that were applied

    Raises:
        RuntimeError: If a script fails; later scripts are not run
    """
    scripts = sorted(migrations_dir.glob("*.sql")) if migrations_dir.is_dir() else []
    if not scripts:
        logger.warning("No migration scripts in %s", migrations_dir)
        return []

    applied: list[str] = []
    with pool.connection() as conn:
        for script in scripts:
            try:
                with conn.transaction():
                    conn.execute(script.read_text())
            except psycopg.Error as e:
                logger.error("Migration %s failed: %s", script.name, e)
                raise RuntimeError(f"Database migration failed: {script.name}") from e
            applied.append(script.name)

    logger.info("Applied %d migration(s): %s", len(applied), ", ".join(applied))
    return applied
