from __future__ import annotations

import os
import sqlite3
import subprocess
import sys
from pathlib import Path

TABLES = {"person", "competence", "competence_profile", "availability", "job_application"}


def _alembic(repo_root: Path, env: dict[str, str], *args: str) -> None:
    subprocess.run(
        [sys.executable, "-m", "alembic", "-c", "alembic.ini", *args],
        cwd=repo_root,
        env=env,
        check=True,
    )


def test_alembic_upgrade_and_downgrade_initial_schema(tmp_path: Path) -> None:
    repo_root = Path(__file__).resolve().parents[2]
    db_path = tmp_path / "migration_test.db"
    env = os.environ.copy()
    env["DATABASE_URL"] = f"sqlite:///{db_path}"

    _alembic(repo_root, env, "upgrade", "head")

    conn = sqlite3.connect(db_path)
    cur = conn.cursor()
    cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
    assert TABLES <= {row[0] for row in cur.fetchall()}

    cur.execute("PRAGMA table_info(person)")
    person_cols = {row[1] for row in cur.fetchall()}
    assert {"person_id", "pnr", "email", "password", "role_id", "username"} <= person_cols

    cur.execute("PRAGMA table_info(job_application)")
    assert {row[1] for row in cur.fetchall()} == {"job_application_id", "person_id", "status"}

    _alembic(repo_root, env, "downgrade", "base")

    cur.execute("SELECT name FROM sqlite_master WHERE type='table'")
    assert not TABLES & {row[0] for row in cur.fetchall()}

    conn.close()
