from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

from sqlalchemy import inspect

from rpos.infrastructure.db.schema import TABLES
from rpos.infrastructure.db.session import build_engine

BACKEND_DIR = Path(__file__).resolve().parents[2]


def _alembic(database_url: str, *args: str) -> None:
    env = os.environ.copy()
    env["DATABASE_URL"] = database_url
    env["PYTHONPATH"] = f"{BACKEND_DIR / 'src'}{os.pathsep}{env.get('PYTHONPATH', '')}".rstrip(
        os.pathsep
    )
    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", *args],
        cwd=BACKEND_DIR,
        env=env,
        check=True,
    )


def test_migrations_create_and_drop_every_table(tmp_path: Path) -> None:
    database_url = f"sqlite:///{tmp_path / 'migrated.db'}"

    _alembic(database_url, "upgrade", "head")
    engine = build_engine(database_url)
    try:
        tables = set(inspect(engine).get_table_names())
        assert {table.name for table in TABLES} <= tables
    finally:
        engine.dispose()

    _alembic(database_url, "downgrade", "base")
    engine = build_engine(database_url)
    try:
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
    finally:
        engine.dispose()


def test_seed_command_populates_menu(tmp_path: Path) -> None:
    env = os.environ.copy()
    env["DATABASE_URL"] = f"sqlite:///{tmp_path / 'seeded.db'}"
    env["PYTHONPATH"] = f"{BACKEND_DIR / 'src'}{os.pathsep}{env.get('PYTHONPATH', '')}".rstrip(
        os.pathsep
    )

    result = subprocess.run(
        [sys.executable, "-m", "rpos.tools.seed"],
        cwd=BACKEND_DIR,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )

    assert "seed complete: 12 menu items" in result.stdout
