"""SQLite chapter store implementation."""

import sqlite3
from pathlib import Path

from chapterwise.models import Chapter, ChapterEmbedding
from chapterwise.stores.base import ChapterStore
from chapterwise.stores.codec import encode_embedding

_CHAPTER_COLUMNS = "c.id, c.title_id, c.chapter_order, c.name, c.content"


def _row_to_chapter(row: tuple) -> Chapter:
    return Chapter(id=row[0], title_id=row[1], order=row[2], name=row[3], content=row[4])


class SQLiteChapterStore(ChapterStore):
    """SQLite-based chapter store.

    Chapters and their embeddings live in separate tables joined by chapter id.
    Embeddings are stored in canonical JSON text form (see stores.codec).
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
                CREATE TABLE IF NOT EXISTS chapters (
                    id TEXT PRIMARY KEY,
                    title_id TEXT NOT NULL,
                    chapter_order INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    content TEXT NOT NULL,
                    UNIQUE (title_id, chapter_order)
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS chapter_embeddings (
                    chapter_id TEXT PRIMARY KEY,
                    embedding TEXT NOT NULL
                )
            """)
            conn.commit()

    def put(self, chapter: Chapter) -> None:
        """Store a chapter, overwriting if exists."""
        self.put_many([chapter])

    def put_many(self, chapters: list[Chapter]) -> None:
        """Store multiple chapters, overwriting if they exist."""
        if not chapters:
            return
        with sqlite3.connect(self.db_path) as conn:
            conn.executemany(
                """
                INSERT OR REPLACE INTO chapters (id, title_id, chapter_order, name, content)
                VALUES (?, ?, ?, ?, ?)
                """,
                [(c.id, c.title_id, c.order, c.name, c.content) for c in chapters],
            )
            conn.commit()

    def get(self, chapter_id: str) -> Chapter | None:
        """Retrieve a chapter by ID."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"SELECT {_CHAPTER_COLUMNS} FROM chapters c WHERE c.id = ?",
                (chapter_id,),
            )
            row = cursor.fetchone()
            return _row_to_chapter(row) if row is not None else None

    def get_by_title(self, title_id: str) -> list[Chapter]:
        """Get all chapters of a title, ordered by chapter order."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"SELECT {_CHAPTER_COLUMNS} FROM chapters c "
                "WHERE c.title_id = ? ORDER BY c.chapter_order",
                (title_id,),
            )
            return [_row_to_chapter(row) for row in cursor.fetchall()]

    def put_embeddings(self, embeddings: list[ChapterEmbedding]) -> None:
        """Store chapter embeddings, overwriting existing ones."""
        if not embeddings:
            return
        rows = [(e.chapter_id, encode_embedding(e.embedding)) for e in embeddings]
        with sqlite3.connect(self.db_path) as conn:
            conn.executemany(
                "INSERT OR REPLACE INTO chapter_embeddings (chapter_id, embedding) VALUES (?, ?)",
                rows,
            )
            conn.commit()

    def save_chapters(
        self,
        chapters: list[Chapter],
        embeddings: list[ChapterEmbedding],
        *,
        replace: bool = False,
    ) -> None:
        """Store chapters and embeddings in a single transaction."""
        embedding_rows = [(e.chapter_id, encode_embedding(e.embedding)) for e in embeddings]
        title_ids = sorted({c.title_id for c in chapters})
        with sqlite3.connect(self.db_path) as conn:
            if replace:
                for title_id in title_ids:
                    self._delete_title_rows(conn, title_id)
            conn.executemany(
                """
                INSERT OR REPLACE INTO chapters (id, title_id, chapter_order, name, content)
                VALUES (?, ?, ?, ?, ?)
                """,
                [(c.id, c.title_id, c.order, c.name, c.content) for c in chapters],
            )
            conn.executemany(
                "INSERT OR REPLACE INTO chapter_embeddings (chapter_id, embedding) "
                "VALUES (?, ?)",
                embedding_rows,
            )
            conn.commit()

    def get_embedding_rows(self, title_id: str) -> list[tuple[Chapter, str | None]]:
        """Get (chapter, embedding text) pairs for a title, ordered by chapter order."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute(
                f"""
                SELECT {_CHAPTER_COLUMNS}, e.embedding
                FROM chapters c
                LEFT JOIN chapter_embeddings e ON e.chapter_id = c.id
                WHERE c.title_id = ?
                ORDER BY c.chapter_order
                """,
                (title_id,),
            )
            return [(_row_to_chapter(row[:5]), row[5]) for row in cursor.fetchall()]

    def count_chapters(self, title_id: str | None = None) -> int:
        """Count chapters, optionally restricted to one title."""
        with sqlite3.connect(self.db_path) as conn:
            if title_id is None:
                cursor = conn.execute("SELECT COUNT(id) FROM chapters")
            else:
                cursor = conn.execute(
                    "SELECT COUNT(id) FROM chapters WHERE title_id = ?", (title_id,)
                )
            count = cursor.fetchone()
            return count[0] if count else 0

    def count_embeddings(self, title_id: str | None = None) -> int:
        """Count chapters that have an embedding."""
        query = (
            "SELECT COUNT(c.id) FROM chapters c "
            "JOIN chapter_embeddings e ON e.chapter_id = c.id"
        )
        with sqlite3.connect(self.db_path) as conn:
            if title_id is None:
                cursor = conn.execute(query)
            else:
                cursor = conn.execute(query + " WHERE c.title_id = ?", (title_id,))
            count = cursor.fetchone()
            return count[0] if count else 0

    def list_titles(self) -> list[str]:
        """List all title IDs that have chapters."""
        with sqlite3.connect(self.db_path) as conn:
            cursor = conn.execute("SELECT DISTINCT title_id FROM chapters ORDER BY title_id")
            return [row[0] for row in cursor.fetchall()]

    def delete_title(self, title_id: str) -> None:
        """Delete all chapters of a title and their embeddings."""
        with sqlite3.connect(self.db_path) as conn:
            self._delete_title_rows(conn, title_id)
            conn.commit()

    @staticmethod
    def _delete_title_rows(conn: sqlite3.Connection, title_id: str) -> None:
        conn.execute(
            "DELETE FROM chapter_embeddings WHERE chapter_id IN "
            "(SELECT id FROM chapters WHERE title_id = ?)",
            (title_id,),
        )
        conn.execute("DELETE FROM chapters WHERE title_id = ?", (title_id,))
