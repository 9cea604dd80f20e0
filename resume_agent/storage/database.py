"""SQLite storage for resumes and customized resumes."""

import json
import logging
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from resume_agent.matching.models import SENT, CustomizedResume
from resume_agent.profile.models import ResumeData

logger = logging.getLogger("resume_agent.storage")


class RecordStore:
    """SQLite key-value style store keyed by record id.

    Writes to the same id from several threads or processes must be
    serialized by the caller.
    """

    def __init__(self, db_path: str = "data/resume_agent.db"):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.conn: Optional[sqlite3.Connection] = None
        self._connect()
        self._create_tables()

    def _connect(self):
        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")

    def _create_tables(self):
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS resumes (
                id TEXT PRIMARY KEY,
                file_name TEXT NOT NULL,
                raw_text TEXT NOT NULL,
                parsed_sections TEXT NOT NULL,
                uploaded_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS customized_resumes (
                id TEXT PRIMARY KEY,
                base_resume_id TEXT NOT NULL,
                job_info TEXT NOT NULL,
                customized_text TEXT NOT NULL,
                customized_file_name TEXT NOT NULL,
                cover_letter TEXT NOT NULL,
                email_subject TEXT NOT NULL,
                email_body TEXT NOT NULL,
                status TEXT NOT NULL,
                created_at TEXT NOT NULL,
                sent_at TEXT DEFAULT NULL
            );

            CREATE INDEX IF NOT EXISTS idx_customized_status
                ON customized_resumes(status);
            CREATE INDEX IF NOT EXISTS idx_customized_base
                ON customized_resumes(base_resume_id);
        """)
        self.conn.commit()

    # Resumes

    def save_resume(self, resume: ResumeData):
        """Insert a resume. Resumes are never updated once stored."""
        self.conn.execute(
            """INSERT OR IGNORE INTO resumes
               (id, file_name, raw_text, parsed_sections, uploaded_at)
               VALUES (?, ?, ?, ?, ?)""",
            (
                resume.id, resume.file_name, resume.raw_text,
                json.dumps(resume.parsed_sections.to_dict(), ensure_ascii=False),
                resume.uploaded_at,
            ),
        )
        self.conn.commit()

    def get_resume(self, resume_id: str) -> Optional[ResumeData]:
        row = self.conn.execute("SELECT * FROM resumes WHERE id = ?", (resume_id,)).fetchone()
        return self._row_to_resume(row) if row else None

    def list_resumes(self) -> list[ResumeData]:
        rows = self.conn.execute("SELECT * FROM resumes ORDER BY uploaded_at").fetchall()
        return [self._row_to_resume(row) for row in rows]

    @staticmethod
    def _row_to_resume(row: sqlite3.Row) -> ResumeData:
        data = dict(row)
        data["parsed_sections"] = json.loads(data["parsed_sections"])
        return ResumeData.from_dict(data)

    # Customized resumes

    def save_customized_resume(self, customized: CustomizedResume):
        self.conn.execute(
            """INSERT OR REPLACE INTO customized_resumes
               (id, base_resume_id, job_info, customized_text, customized_file_name,
                cover_letter, email_subject, email_body, status, created_at, sent_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                customized.id, customized.base_resume_id,
                json.dumps(customized.job_info.to_dict(), ensure_ascii=False),
                customized.customized_text, customized.customized_file_name,
                customized.cover_letter, customized.email_subject, customized.email_body,
                customized.status, customized.created_at, customized.sent_at,
            ),
        )
        self.conn.commit()

    def get_customized_resume(self, customized_id: str) -> Optional[CustomizedResume]:
        row = self.conn.execute(
            "SELECT * FROM customized_resumes WHERE id = ?", (customized_id,)
        ).fetchone()
        if row is None:
            return None
        data = dict(row)
        data["job_info"] = json.loads(data["job_info"])
        return CustomizedResume.from_dict(data)

    def update_status(self, customized_id: str, status: str) -> CustomizedResume:
        """Apply a lifecycle transition and persist status/sent_at only.

        Raises KeyError for unknown ids and ValueError for disallowed moves.
        """
        customized = self.get_customized_resume(customized_id)
        if customized is None:
            raise KeyError(f"Customized resume not found: {customized_id}")

        customized.transition(status)
        self.conn.execute(
            "UPDATE customized_resumes SET status = ?, sent_at = ? WHERE id = ?",
            (customized.status, customized.sent_at, customized.id),
        )
        self.conn.commit()
        logger.info("Customized resume %s is now %s", customized.id, customized.status)
        return customized

    def get_stats(self) -> dict:
        """Get store statistics."""
        stats = {}

        row = self.conn.execute("SELECT COUNT(*) as cnt FROM resumes").fetchone()
        stats["resume_count"] = row["cnt"]

        row = self.conn.execute("SELECT COUNT(*) as cnt FROM customized_resumes").fetchone()
        stats["customized_count"] = row["cnt"]

        row = self.conn.execute(
            "SELECT COUNT(*) as cnt FROM customized_resumes WHERE status = ?", (SENT,)
        ).fetchone()
        stats["total_sent"] = row["cnt"]

        today = datetime.now().date().isoformat()
        row = self.conn.execute(
            "SELECT COUNT(*) as cnt FROM customized_resumes WHERE status = ? AND sent_at LIKE ?",
            (SENT, f"{today}%"),
        ).fetchone()
        stats["sent_today"] = row["cnt"]

        rows = self.conn.execute(
            "SELECT status, COUNT(*) as cnt FROM customized_resumes GROUP BY status"
        ).fetchall()
        stats["by_status"] = {row["status"]: row["cnt"] for row in rows}

        return stats

    def close(self):
        if self.conn:
            self.conn.close()
            self.conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
