"""SQLite question store implementation."""

import sqlite3
import time
from datetime import datetime, timezone
from pathlib import Path

from chapterwise.models import Question, QuestionStatus
from chapterwise.stores.base import QuestionStore

_COLUMNS = (
    "id, user_id, title_id, question_text, chapter_limit, "
    "answer_text, status, created_at, updated_at"
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _row_to_question(row: tuple) -> Question:
    return Question(
        id=row[0],
        user_id=row[1],
        title_id=row[2],
        question_text=row[3],
        chapter_limit=row[4],
        answer_text=row[5],
        status=QuestionStatus(row[6]),
        created_at=datetime.fromisoformat(row[7]),
        updated_at=datetime.fromisoformat(row[8]),
    )


class SQLiteQuestionStore(QuestionStore):
    """SQLite-based question store.

    Run leases are two extra columns (run_token, lease_expires_at as epoch
    seconds). Each transition is one conditional UPDATE, so SQLite's write
    lock makes it atomic across threads and processes.
    """

    def __init__(self, db_path: str) -> None:
        """Initialize the SQLite store."""
        self.db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Create tables if they don't exist."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS questions (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    title_id TEXT NOT NULL,
                    question_text TEXT NOT NULL,
                    chapter_limit INTEGER,
                    answer_text TEXT,
                    status TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    run_token TEXT,
                    lease_expires_at REAL
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_questions_user ON questions(user_id)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_questions_status ON questions(status)")
            conn.commit()

    def put(self, question: Question) -> None:
        """Store a question, overwriting if exists. Any run lease is dropped."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                f"""
                INSERT OR REPLACE INTO questions ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    question.id,
                    question.user_id,
                    question.title_id,
                    question.question_text,
                    question.chapter_limit,
                    question.answer_text,
                    question.status.value,
                    question.created_at.isoformat(),
                    question.updated_at.isoformat(),
                ),
            )
            conn.commit()

    def get(self, question_id: str) -> Question | None:
        """Retrieve a question by ID."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"SELECT {_COLUMNS} FROM questions WHERE id = ?",
                (question_id,),
            )
            row = cursor.fetchone()
            return _row_to_question(row) if row is not None else None

    def list_questions(
        self,
        user_id: str | None = None,
        title_id: str | None = None,
        status: QuestionStatus | None = None,
        since: datetime | None = None,
    ) -> list[Question]:
        """List questions matching all given filters, newest first."""
        clauses: list[str] = []
        params: list[str] = []
        if user_id is not None:
            clauses.append("user_id = ?")
            params.append(user_id)
        if title_id is not None:
            clauses.append("title_id = ?")
            params.append(title_id)
        if status is not None:
            clauses.append("status = ?")
            params.append(QuestionStatus(status).value)

        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(f"SELECT {_COLUMNS} FROM questions{where}", params)
            questions = [_row_to_question(row) for row in cursor.fetchall()]

        # Compared as datetimes: ISO strings with and without microseconds don't sort lexically.
        if since is not None:
            questions = [q for q in questions if q.created_at >= since]
        return sorted(questions, key=lambda q: q.created_at, reverse=True)

    def delete(self, question_id: str) -> None:
        """Delete a question by ID."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("DELETE FROM questions WHERE id = ?", (question_id,))
            conn.commit()

    def count_questions(self, status: QuestionStatus | None = None) -> int:
        """Count questions, optionally restricted to one status."""
        with sqlite3.connect(self.db_path) as conn:
            if status is None:
                cursor = conn.execute("SELECT COUNT(id) FROM questions")
            else:
                cursor = conn.execute(
                    "SELECT COUNT(id) FROM questions WHERE status = ?",
                    (QuestionStatus(status).value,),
                )
            count = cursor.fetchone()
            return count[0] if count else 0

    def claim(self, question_id: str, run_token: str, lease_seconds: float) -> bool:
        """Set status pending and take the run lease unless another run holds it."""
        now = time.time()
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                """
                UPDATE questions
                SET status = ?, run_token = ?, lease_expires_at = ?, updated_at = ?
                WHERE id = ?
                  AND (run_token IS NULL OR lease_expires_at IS NULL OR lease_expires_at <= ?)
                """,
                (
                    QuestionStatus.PENDING.value,
                    run_token,
                    now + lease_seconds,
                    _now_iso(),
                    question_id,
                    now,
                ),
            )
            conn.commit()
            return cursor.rowcount == 1

    def complete(self, question_id: str, run_token: str, answer_text: str) -> bool:
        """Write the answer and set status answered if run_token still owns the question."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                """
                UPDATE questions
                SET answer_text = ?, status = ?, run_token = NULL,
                    lease_expires_at = NULL, updated_at = ?
                WHERE id = ? AND run_token = ?
                """,
                (answer_text, QuestionStatus.ANSWERED.value, _now_iso(), question_id, run_token),
            )
            conn.commit()
            return cursor.rowcount == 1

    def fail(self, question_id: str, run_token: str) -> bool:
        """Set status failed if run_token still owns the question."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                """
                UPDATE questions
                SET status = ?, run_token = NULL, lease_expires_at = NULL, updated_at = ?
                WHERE id = ? AND run_token = ?
                """,
                (QuestionStatus.FAILED.value, _now_iso(), question_id, run_token),
            )
            conn.commit()
            return cursor.rowcount == 1
