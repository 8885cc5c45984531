"""SQLite listing store for jobs, candidates, and unlocks.

Listings are stored as JSON payloads keyed by id so that the store accepts
whatever shape the upstream data has; validation happens on read.
"""

import json
import logging
import sqlite3
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hiredeck.core.schemas import Candidate, Job, Role

logger = logging.getLogger(__name__)

_JOBS_TABLE = """
CREATE TABLE IF NOT EXISTS jobs (
    id          TEXT PRIMARY KEY,
    payload     TEXT NOT NULL,
    batch       INTEGER NOT NULL DEFAULT 0,
    created_at  TEXT NOT NULL
);
"""

_CANDIDATES_TABLE = """
CREATE TABLE IF NOT EXISTS candidates (
    id          TEXT PRIMARY KEY,
    payload     TEXT NOT NULL,
    batch       INTEGER NOT NULL DEFAULT 0,
    created_at  TEXT NOT NULL
);
"""

_UNLOCKS_TABLE = """
CREATE TABLE IF NOT EXISTS unlocks (
    role         TEXT NOT NULL,
    listing_id   TEXT NOT NULL,
    amount       REAL NOT NULL,
    unlocked_at  TEXT NOT NULL,
    PRIMARY KEY (role, listing_id)
);
"""

_LISTING_TABLES = {"jobs": Job, "candidates": Candidate}


def init_db(path: str | Path) -> sqlite3.Connection:
    """Create the database and tables, returning a connection."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(_JOBS_TABLE)
    conn.execute(_CANDIDATES_TABLE)
    conn.execute(_UNLOCKS_TABLE)
    conn.commit()
    return conn


def upsert_jobs(conn: sqlite3.Connection, jobs: Iterable[dict[str, Any] | Job]) -> int:
    """Insert or replace job rows. Returns the number written."""
    return _upsert(conn, "jobs", jobs)


def upsert_candidates(
    conn: sqlite3.Connection,
    candidates: Iterable[dict[str, Any] | Candidate],
) -> int:
    """Insert or replace candidate rows. Returns the number written."""
    return _upsert(conn, "candidates", candidates)


def fetch_jobs(conn: sqlite3.Connection) -> list[Job]:
    return _fetch(conn, "jobs")  # type: ignore[return-value]


def fetch_candidates(conn: sqlite3.Connection) -> list[Candidate]:
    return _fetch(conn, "candidates")  # type: ignore[return-value]


def count_listings(conn: sqlite3.Connection, table: str) -> int:
    if table not in _LISTING_TABLES:
        msg = f"Unknown listing table: {table}"
        raise ValueError(msg)
    row = conn.execute(f"SELECT COUNT(*) AS n FROM {table}").fetchone()
    return int(row["n"])


def record_unlocks(
    conn: sqlite3.Connection,
    role: Role,
    listing_ids: Iterable[str],
    amount: float,
    unlocked_at: datetime | None = None,
) -> list[str]:
    """Record unlocks, ignoring ids the role already unlocked.

    Returns the ids that were newly recorded.
    """
    stamp = (unlocked_at or datetime.now()).isoformat()
    recorded: list[str] = []
    for listing_id in listing_ids:
        cursor = conn.execute(
            """
            INSERT OR IGNORE INTO unlocks (role, listing_id, amount, unlocked_at)
            VALUES (?, ?, ?, ?)
            """,
            (role, listing_id, amount, stamp),
        )
        if cursor.rowcount:
            recorded.append(listing_id)
    conn.commit()
    return recorded


def get_unlocked_ids(conn: sqlite3.Connection, role: Role) -> set[str]:
    rows = conn.execute(
        "SELECT listing_id FROM unlocks WHERE role = ?",
        (role,),
    ).fetchall()
    return {row["listing_id"] for row in rows}


def _upsert(
    conn: sqlite3.Connection,
    table: str,
    rows: Iterable[dict[str, Any] | Job | Candidate],
) -> int:
    stamp = datetime.now().isoformat()
    batch = conn.execute(f"SELECT COALESCE(MAX(batch), 0) + 1 FROM {table}").fetchone()[0]
    written = 0
    for row in rows:
        data = row.model_dump(exclude_none=True) if isinstance(row, (Job, Candidate)) else dict(row)
        listing_id = data.get("id")
        if listing_id is None:
            logger.warning("Skipping %s row without id", table)
            continue
        conn.execute(
            f"INSERT OR REPLACE INTO {table} (id, payload, batch, created_at) VALUES (?, ?, ?, ?)",
            (str(listing_id), json.dumps(data), batch, stamp),
        )
        written += 1
    conn.commit()
    return written


def _fetch(conn: sqlite3.Connection, table: str) -> list[Job | Candidate]:
    model = _LISTING_TABLES[table]
    listings: list[Job | Candidate] = []
    # Newest write batch first; rows written together keep insertion order.
    rows = conn.execute(
        f"SELECT id, payload FROM {table} ORDER BY batch DESC, rowid"
    ).fetchall()
    for row in rows:
        try:
            listings.append(model.model_validate_json(row["payload"]))
        except ValidationError as e:
            logger.warning("Skipping malformed %s row '%s': %s", table, row["id"], e.error_count())
    return listings
