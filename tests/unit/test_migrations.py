"""
Unit tests for run_migrations.

Uses a mocked ConnectionPool; the SQL itself is exercised by the
PostgreSQL integration tests.
"""

from pathlib import Path
from unittest.mock import MagicMock

import psycopg
import pytest

from postboard.adapters.repository.postgres import MIGRATIONS_DIR, run_migrations


def _pool() -> tuple[MagicMock, MagicMock]:
    pool = MagicMock()
    conn = pool.connection.return_value.__enter__.return_value
    return pool, conn


class TestRunMigrations:
    """Tests for run_migrations."""

    def test_bundled_scripts_found(self) -> None:
        names = sorted(p.name for p in MIGRATIONS_DIR.glob("*.sql"))
        assert names == ["001_create_users.sql", "002_create_posts.sql"]

    def test_scripts_run_in_filename_order(self, tmp_path: Path) -> None:
        (tmp_path / "002_second.sql").write_text("SELECT 2")
        (tmp_path / "001_first.sql").write_text("SELECT 1")
        pool, conn = _pool()

        applied = run_migrations(pool, tmp_path)

        assert applied == ["001_first.sql", "002_second.sql"]
        assert [c.args[0] for c in conn.execute.call_args_list] == ["SELECT 1", "SELECT 2"]
        assert conn.transaction.call_count == 2

    def test_failure_stops_and_raises(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / "001_bad.sql").write_text("CREATE BROKEN")
        (tmp_path / "002_never.sql").write_text("SELECT 1")
        pool, conn = _pool()
        conn.execute.side_effect = psycopg.Error("syntax error")

        with pytest.raises(RuntimeError, match="001_bad.sql"):
            run_migrations(pool, tmp_path)

        assert conn.execute.call_count == 1
        assert "Migration 001_bad.sql failed" in caplog.text

    def test_missing_directory_is_skipped(self, tmp_path: Path) -> None:
        pool, _ = _pool()

        assert run_migrations(pool, tmp_path / "absent") == []
        pool.connection.assert_not_called()
