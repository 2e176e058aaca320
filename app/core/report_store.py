from __future__ import annotations

import logging
import os
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Protocol

from pydantic import ValidationError

from app.core.config import settings
from app.schemas.analysis import AnalysisReport

logger = logging.getLogger(__name__)

REPORT_KEY = "analysisResults"


class ReportChannel(Protocol):
    def submit(self, report: AnalysisReport) -> None: ...

    def latest(self) -> AnalysisReport | None: ...


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryReportStore:
    def __init__(self) -> None:
        self._blob: str | None = None
        self._lock = threading.Lock()

    def submit(self, report: AnalysisReport) -> None:
        blob = report.model_dump_json()
        with self._lock:
            self._blob = blob

    def latest(self) -> AnalysisReport | None:
        with self._lock:
            blob = self._blob
        if blob is None:
            return None
        return AnalysisReport.model_validate_json(blob)

    def clear(self) -> None:
        with self._lock:
            self._blob = None


class SQLiteReportStore:
    """Keeps the most recent report as a JSON blob under one fixed key."""

    def __init__(self, db_path: str | None = None, key: str = REPORT_KEY):
        self._db_path = db_path or settings.report_store_db_path
        self._key = key
        self._conn: sqlite3.Connection | None = None
        self._conn_lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._conn_lock:
            if self._conn is not None:
                return self._conn

            directory = os.path.dirname(self._db_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            self._conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            self._conn.execute("PRAGMA journal_mode=WAL;")
            self._conn.execute("PRAGMA synchronous=NORMAL;")
            self._conn.execute("PRAGMA busy_timeout=5000;")
            self._conn.execute(
                """
                CREATE TABLE IF NOT EXISTS report_store (
                    store_key TEXT PRIMARY KEY,
                    payload_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            return self._conn

    def init(self) -> None:
        self._get_connection()

    def submit(self, report: AnalysisReport) -> None:
        conn = self._get_connection()
        payload_json = report.model_dump_json()
        with self._conn_lock:
            conn.execute(
                """
                INSERT INTO report_store (store_key, payload_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(store_key) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """,
                (self._key, payload_json, _utc_now().isoformat()),
            )
        logger.info("report_store_submitted key=%s overall_score=%s", self._key, report.overall_score)

    def latest(self) -> AnalysisReport | None:
        conn = self._get_connection()
        with self._conn_lock:
            row = conn.execute(
                "SELECT payload_json FROM report_store WHERE store_key = ?",
                (self._key,),
            ).fetchone()

        if not row or not row[0]:
            return None
        try:
            return AnalysisReport.model_validate_json(row[0])
        except ValidationError:
            logger.warning("report_store_corrupt_payload key=%s", self._key)
            return None

    def clear(self) -> None:
        conn = self._get_connection()
        with self._conn_lock:
            conn.execute("DELETE FROM report_store WHERE store_key = ?", (self._key,))

    def close(self) -> None:
        with self._conn_lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None
