from __future__ import annotations

from sqlite3 import Connection, Row
from typing import Optional

_COLUMNS = "id, name, email, course, created_at"


def list_all(conn: Connection) -> list[Row]:
    sql = (
        f"SELECT {_COLUMNS} FROM students "
        "ORDER BY created_at DESC, id DESC"
    )
    return conn.execute(sql).fetchall()


def get_one(conn: Connection, student_id: int) -> Optional[Row]:
    return conn.execute(
        f"SELECT {_COLUMNS} FROM students WHERE id=?", (student_id,)
    ).fetchone()


def insert(conn: Connection, name: str, email: str, course: str) -> int:
    cur = conn.execute(
        "INSERT INTO students(name, email, course) VALUES(?, ?, ?)",
        (name, email, course),
    )
    return int(cur.lastrowid)


def update(conn: Connection, student_id: int, name: str, email: str, course: str) -> int:
    """Returns the number of matched rows (0 when the id is unknown)."""
    cur = conn.execute(
        "UPDATE students SET name=?, email=?, course=? WHERE id=?",
        (name, email, course, student_id),
    )
    return cur.rowcount


def delete(conn: Connection, student_id: int) -> int:
    cur = conn.execute("DELETE FROM students WHERE id=?", (student_id,))
    return cur.rowcount

