from __future__ import annotations

import json
import logging
import os
import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Sequence

from app.core.config import settings
from app.schemas.analysis import AnalysisRecord, AnalysisResult

logger = logging.getLogger(__name__)

_conn: sqlite3.Connection | None = None
_conn_lock = threading.Lock()
_db_path_override: str | None = None

_SELECT_COLUMNS = """
    id, analysis_id, job_description, keywords_json, resume_file_name,
    ats_score, analysis_result_json, created_at, updated_at
"""


class DuplicateAnalysisError(RuntimeError):
    def __init__(self, analysis_id: str):
        super().__init__(f"Analysis '{analysis_id}' already exists.")
        self.analysis_id = analysis_id


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _get_db_path() -> str:
    return _db_path_override or settings.analysis_db_path


def _get_connection() -> sqlite3.Connection:
    global _conn
    with _conn_lock:
        if _conn is not None:
            return _conn

        db_path = _get_db_path()
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        _conn = sqlite3.connect(
            db_path,
            check_same_thread=False,
            timeout=5,
            isolation_level=None,
        )
        _conn.execute("PRAGMA journal_mode=WAL;")
        _conn.execute("PRAGMA synchronous=NORMAL;")
        _conn.execute("PRAGMA busy_timeout=5000;")
        _conn.execute(
            """
            CREATE TABLE IF NOT EXISTS analysis_records (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                analysis_id TEXT NOT NULL UNIQUE,
                job_description TEXT NOT NULL,
                keywords_json TEXT,
                resume_file_name TEXT,
                ats_score REAL NOT NULL,
                analysis_result_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        _conn.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_analysis_records_created_at
            ON analysis_records (created_at);
            """
        )
        return _conn


def init_store() -> None:
    _get_connection()
    logger.info("analysis_store_ready path=%s", _get_db_path())


def reset_analysis_store(db_path: str | None = None) -> None:
    """Close the shared connection; the next call reopens it at ``db_path`` (or the configured path)."""
    global _conn, _db_path_override
    with _conn_lock:
        if _conn is not None:
            _conn.close()
        _conn = None
        _db_path_override = db_path


def _row_to_record(row: tuple[Any, ...]) -> AnalysisRecord:
    return AnalysisRecord(
        id=row[0],
        analysis_id=row[1],
        job_description=row[2],
        keywords=json.loads(row[3]) if row[3] else None,
        resume_file_name=row[4],
        ats_score=float(row[5]),
        analysis_result=json.loads(row[6]) if row[6] else {},
        created_at=datetime.fromisoformat(row[7]),
        updated_at=datetime.fromisoformat(row[8]),
    )


def save_analysis(
    *,
    result: AnalysisResult,
    job_description: str,
    keywords: Sequence[str] | None = None,
    resume_file_name: str | None = None,
) -> AnalysisRecord:
    conn = _get_connection()
    created_at = _as_utc(result.created_at).isoformat(timespec="microseconds")
    updated_at = _utc_now().isoformat(timespec="microseconds")
    keywords_json = json.dumps(list(keywords), ensure_ascii=False) if keywords is not None else None
    result_json = json.dumps(result.to_document(), ensure_ascii=False)

    with _conn_lock:
        try:
            cur = conn.execute(
                """
                INSERT INTO analysis_records (
                    analysis_id, job_description, keywords_json, resume_file_name,
                    ats_score, analysis_result_json, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    result.analysis_id,
                    job_description,
                    keywords_json,
                    resume_file_name,
                    float(result.ats_score),
                    result_json,
                    created_at,
                    updated_at,
                ),
            )
        except sqlite3.IntegrityError as exc:
            raise DuplicateAnalysisError(result.analysis_id) from exc
        row_id = cur.lastrowid
        row = conn.execute(
            f"SELECT {_SELECT_COLUMNS} FROM analysis_records WHERE id = ?",
            (row_id,),
        ).fetchone()

    logger.info("analysis_saved analysis_id=%s ats_score=%s", result.analysis_id, result.ats_score)
    return _row_to_record(row)


def get_analysis(analysis_id: str) -> AnalysisRecord | None:
    conn = _get_connection()
    with _conn_lock:
        row = conn.execute(
            f"SELECT {_SELECT_COLUMNS} FROM analysis_records WHERE analysis_id = ?",
            (analysis_id,),
        ).fetchone()
    if not row:
        return None
    return _row_to_record(row)


def list_analyses(limit: int | None = None) -> list[AnalysisRecord]:
    """Newest first. ``limit=None`` returns everything, ``limit=0`` returns nothing."""
    if limit is not None and limit < 0:
        raise ValueError("limit must be zero or positive")
    if limit == 0:
        return []

    conn = _get_connection()
    query = f"SELECT {_SELECT_COLUMNS} FROM analysis_records ORDER BY created_at DESC, id DESC"
    params: tuple[Any, ...] = ()
    if limit is not None:
        query += " LIMIT ?"
        params = (limit,)

    with _conn_lock:
        rows = conn.execute(query, params).fetchall()
    return [_row_to_record(row) for row in rows]


def purge_old_analyses() -> int:
    retention_days = int(settings.analysis_retention_days)
    if retention_days <= 0:
        return 0

    conn = _get_connection()
    cutoff = (_utc_now() - timedelta(days=retention_days)).isoformat(timespec="microseconds")
    with _conn_lock:
        cur = conn.execute("DELETE FROM analysis_records WHERE created_at < ?", (cutoff,))
    return int(cur.rowcount or 0)


def clear_analyses() -> None:
    conn = _get_connection()
    with _conn_lock:
        conn.execute("DELETE FROM analysis_records")
