"""Alembic migration tests.

File named test_zzz_alembic.py to sort LAST in pytest collection order.
"""

import os
import subprocess
import sys
from pathlib import Path

import sqlalchemy as sa

ROOT = Path(__file__).resolve().parents[1]


def _alembic(db_path: Path, *args: str) -> subprocess.CompletedProcess[str]:
    env = {**os.environ, "SKILLSWAP_DATABASE_URL": f"sqlite+aiosqlite:///{db_path}"}
    return subprocess.run(
        [sys.executable, "-m", "alembic", *args],
        capture_output=True,
        text=True,
        cwd=ROOT,
        env=env,
    )


def test_alembic_upgrade_head(tmp_path: Path) -> None:
    """alembic upgrade head creates every table."""
    db_path = tmp_path / "migrated.db"
    result = _alembic(db_path, "upgrade", "head")
    assert result.returncode == 0, f"alembic upgrade failed: {result.stderr}"

    engine = sa.create_engine(f"sqlite:///{db_path}")
    try:
        tables = set(sa.inspect(engine).get_table_names())
    finally:
        engine.dispose()
    assert {
        "users",
        "user_skills_offered",
        "user_skills_wanted",
        "swap_requests",
        "ratings",
        "platform_messages",
        "platform_message_reads",
        "reports",
        "moderation_logs",
    } <= tables


def test_alembic_current_shows_head(tmp_path: Path) -> None:
    """alembic current shows the latest revision."""
    db_path = tmp_path / "migrated.db"
    assert _alembic(db_path, "upgrade", "head").returncode == 0
    result = _alembic(db_path, "current")
    assert result.returncode == 0
    assert "001_initial_schema" in result.stdout
