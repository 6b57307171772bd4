"""
Plain-SQL migration runner.

    python -m authcenter.infrastructure.db.migrate up
    python -m authcenter.infrastructure.db.migrate status
    python -m authcenter.infrastructure.db.migrate new add_some_index

Each identity type has its own tree (migrations/bigint, migrations/text);
MIGRATIONS_DIR overrides the choice. A file's stem is its version, and every
file runs in its own transaction together with its bookkeeping row.
"""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import psycopg

from authcenter.settings import get_settings

_TREES = {"int": "bigint", "str": "text"}

_BOOKKEEPING_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
  version    text PRIMARY KEY,
  applied_at timestamptz NOT NULL DEFAULT now()
);
"""


def migrations_dir(identity_type: str | None = None) -> Path:
    override = os.environ.get("MIGRATIONS_DIR")
    if override:
        return Path(override)
    kind = identity_type or get_settings().identity_type
    return Path("migrations") / _TREES[kind]


def list_migrations(directory: Path) -> list[Path]:
    if not directory.is_dir():
        print(f"ERROR: migrations dir not found: {directory}", file=sys.stderr)
        sys.exit(2)
    return sorted(directory.glob("*.sql"))


def _connect() -> psycopg.Connection:
    url = get_settings().database_url
    if not url:
        print("ERROR: DATABASE_URL is not set", file=sys.stderr)
        sys.exit(2)
    return psycopg.connect(url)


def _applied(conn: psycopg.Connection) -> dict[str, datetime]:
    with conn.transaction():
        conn.execute(_BOOKKEEPING_SQL)
        rows = conn.execute(
            "SELECT version, applied_at FROM schema_migrations ORDER BY version"
        ).fetchall()
    return {version: at for version, at in rows}


def cmd_up(directory: Path) -> int:
    files = list_migrations(directory)
    with _connect() as conn:
        done = _applied(conn)
        pending = [p for p in files if p.stem not in done]
        if not pending:
            print("No pending migrations.")
            return 0
        for path in pending:
            print(f"==> applying {path.stem}", flush=True)
            try:
                with conn.transaction():
                    conn.execute(path.read_text(encoding="utf-8"))
                    conn.execute(
                        "INSERT INTO schema_migrations (version) VALUES (%s)",
                        (path.stem,),
                    )
            except psycopg.Error as e:
                print(f"failed {path.stem}: {e}", file=sys.stderr)
                return 1
    return 0


def cmd_status(directory: Path) -> int:
    files = list_migrations(directory)
    with _connect() as conn:
        done = _applied(conn)
    print("=== Applied ===")
    for version, at in done.items():
        print(f"{version} @ {at.isoformat()}")
    print("=== Pending ===")
    for path in files:
        if path.stem not in done:
            print(path.stem)
    return 0


def cmd_new(directory: Path, name: str) -> int:
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M")
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{stamp}_{name}.sql"
    path.write_text("-- write your SQL here\n", encoding="utf-8")
    print(str(path))
    return 0


_USAGE = "usage: python -m authcenter.infrastructure.db.migrate [up|status|new <name>]"


def main(argv: list[str]) -> int:
    commands: dict[str, Callable[..., int]] = {
        "up": cmd_up,
        "status": cmd_status,
        "new": cmd_new,
    }
    if len(argv) < 2 or argv[1] not in commands:
        print(_USAGE, file=sys.stderr)
        return 2
    args = argv[2:3] if argv[1] == "new" else []
    if argv[1] == "new" and not args:
        print("usage: ... new <name>", file=sys.stderr)
        return 2
    return commands[argv[1]](migrations_dir(), *args)


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
