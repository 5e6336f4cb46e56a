import sqlite3, os
import logging
from typing import Iterable, List, Optional

from typemaster.app.errors import DatabaseError, LessonError
from typemaster.app.models import Difficulty, Lesson, SessionPayload, SessionRecord

logger = logging.getLogger(__name__)

DB_PATH = "data/typemaster.db"

def _ensure_schema(conn):
    conn.execute("""
    CREATE TABLE IF NOT EXISTS users(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT UNIQUE NOT NULL,
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)
    conn.execute("""
    CREATE TABLE IF NOT EXISTS lessons(
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        content TEXT NOT NULL,
        difficulty TEXT NOT NULL CHECK (difficulty IN ('beginner', 'intermediate', 'advanced')),
        category TEXT NOT NULL DEFAULT 'general',
        created_at DATETIME DEFAULT CURRENT_TIMESTAMP
    );
    """)
    conn.execute("""
    CREATE TABLE IF NOT EXISTS typing_sessions(
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL,
        lesson_id TEXT NOT NULL,
        wpm INTEGER NOT NULL DEFAULT 0,
        accuracy INTEGER NOT NULL DEFAULT 0,
        time_taken INTEGER NOT NULL DEFAULT 0,
        completed INTEGER NOT NULL DEFAULT 0,
        created_at DATETIME DEFAULT (strftime('%Y-%m-%d %H:%M:%f', 'now')),
        FOREIGN KEY(user_id) REFERENCES users(id),
        FOREIGN KEY(lesson_id) REFERENCES lessons(id)
    );
    """)

def get_conn(db_path: str = DB_PATH):
    folder = os.path.dirname(db_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    _ensure_schema(conn)
    return conn

def upsert_user(username: str, db_path: str = DB_PATH) -> int:
    conn = None
    try:
        conn = get_conn(db_path)
        cur = conn.cursor()
        cur.execute("INSERT OR IGNORE INTO users(username) VALUES (?)", (username,))
        conn.commit()
        cur.execute("SELECT id FROM users WHERE username=?", (username,))
        row = cur.fetchone()
        return row[0]
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()

def insert_session(payload: SessionPayload, db_path: str = DB_PATH) -> int:
    conn = None
    try:
        conn = get_conn(db_path)
        cur = conn.cursor()
        cur.execute(
            "INSERT INTO typing_sessions(user_id, lesson_id, wpm, accuracy, time_taken, completed) "
            "VALUES (?,?,?,?,?,?)",
            (payload.user_id, payload.lesson_id, payload.wpm, payload.accuracy,
             payload.time_taken, int(payload.completed))
        )
        conn.commit()
        return cur.lastrowid
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()

def recent_sessions(user_id: int, limit: int = 10, db_path: str = DB_PATH) -> List[SessionRecord]:
    """Newest first, with the lesson's title and difficulty attached."""
    conn = None
    try:
        conn = get_conn(db_path)
        rows = conn.execute(
            """
            SELECT s.id, s.user_id, s.lesson_id, s.wpm, s.accuracy, s.time_taken,
                   s.completed, s.created_at, l.title, l.difficulty
            FROM typing_sessions s
            LEFT JOIN lessons l ON l.id = s.lesson_id
            WHERE s.user_id = ?
            ORDER BY s.created_at DESC, s.id DESC
            LIMIT ?
            """,
            (user_id, limit),
        ).fetchall()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()
    return [_record_from_row(r) for r in rows]

def _record_from_row(row) -> SessionRecord:
    difficulty: Optional[Difficulty] = None
    if row["difficulty"]:
        difficulty = Difficulty(row["difficulty"])
    return SessionRecord(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        lesson_id=str(row["lesson_id"]),
        wpm=int(row["wpm"]),
        accuracy=int(row["accuracy"]),
        time_taken=int(row["time_taken"]),
        completed=bool(row["completed"]),
        created_at=str(row["created_at"]),
        lesson_title=row["title"] or "",
        lesson_difficulty=difficulty,
    )

def insert_lessons(lessons: Iterable[Lesson], db_path: str = DB_PATH) -> int:
    conn = None
    try:
        conn = get_conn(db_path)
        cur = conn.executemany(
            "INSERT OR IGNORE INTO lessons(id, title, content, difficulty, category) VALUES (?,?,?,?,?)",
            [(l.id, l.title, l.content, l.difficulty.value, l.category) for l in lessons]
        )
        conn.commit()
        return cur.rowcount
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()

def fetch_lessons(db_path: str = DB_PATH) -> List[Lesson]:
    conn = None
    try:
        conn = get_conn(db_path)
        rows = conn.execute(
            "SELECT id, title, content, difficulty, category, created_at FROM lessons"
        ).fetchall()
    except sqlite3.Error as e:
        raise DatabaseError(str(e))
    finally:
        if conn is not None:
            conn.close()
    lessons = []
    for r in rows:
        try:
            lessons.append(Lesson.from_dict(dict(r)))
        except LessonError as e:
            logger.warning("Skipping stored lesson %r: %s", r["id"], e)
    return lessons
