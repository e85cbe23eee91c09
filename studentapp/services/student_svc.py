from __future__ import annotations

import logging
import sqlite3

from ..db import StorageHandle
from ..domain.student import Student
from ..errors import DuplicateEmailError, NotFoundError, StorageError, ValidationError
from ..logs import LogContext
from ..repository import student_repo
from ..validation import MAX_ID, REQUIRED_MESSAGE

logger = logging.getLogger(__name__)


def _check_id(student_id) -> int:
    # bool is an int subclass; reject it along with everything non-integral
    if isinstance(student_id, bool) or not isinstance(student_id, int) or student_id < 1:
        raise ValidationError("invalid_student_id")
    return student_id


def _check_fields(name, email, course):
    for v in (name, email, course):
        if not isinstance(v, str) or not v.strip():
            raise ValidationError(REQUIRED_MESSAGE)


def _is_email_conflict(e: sqlite3.IntegrityError) -> bool:
    msg = str(e)
    return "UNIQUE" in msg and "students.email" in msg


class StudentRepository:
    """
    The only component that reads or writes the students table.

    Built once per process around a StorageHandle and handed to every request
    handler. SQLite exceptions never leave this class: unique violations on
    email become DuplicateEmailError, everything else StorageError.
    """

    def __init__(self, storage: StorageHandle):
        self.storage = storage

    def list(self) -> list[Student]:
        try:
            with self.storage.connection() as conn:
                rows = student_repo.list_all(conn)
        except sqlite3.Error as e:
            logger.error("list students failed: %s", e)
            raise StorageError(str(e)) from e
        return [Student.from_row(r) for r in rows]

    def get_by_id(self, student_id: int) -> Student | None:
        student_id = _check_id(student_id)
        if student_id > MAX_ID:
            return None
        try:
            with self.storage.connection() as conn:
                row = student_repo.get_one(conn, student_id)
        except sqlite3.Error as e:
            logger.error("get student %s failed: %s", student_id, e)
            raise StorageError(str(e)) from e
        return Student.from_row(row) if row else None

    def create(self, name: str, email: str, course: str, log: LogContext | None = None) -> int:
        _check_fields(name, email, course)
        log = log or LogContext("CREATE_STUDENT")
        log.set_payload({"name": name, "email": email, "course": course})
        try:
            with self.storage.connection() as conn:
                new_id = student_repo.insert(conn, name, email, course)
        except sqlite3.IntegrityError as e:
            if _is_email_conflict(e):
                log.write("CONFLICT", "duplicate_email")
                raise DuplicateEmailError(email) from e
            log.write("ERROR", str(e))
            raise StorageError(str(e)) from e
        except sqlite3.Error as e:
            log.write("ERROR", str(e))
            raise StorageError(str(e)) from e
        log.set_entity("student", new_id)
        log.write("OK")
        return new_id

    def update(self, student_id: int, name: str, email: str, course: str, log: LogContext | None = None) -> None:
        student_id = _check_id(student_id)
        _check_fields(name, email, course)
        if student_id > MAX_ID:
            raise NotFoundError(student_id)
        log = log or LogContext("UPDATE_STUDENT")
        log.set_entity("student", student_id)
        log.set_payload({"name": name, "email": email, "course": course})
        try:
            with self.storage.connection() as conn:
                matched = student_repo.update(conn, student_id, name, email, course)
        except sqlite3.IntegrityError as e:
            if _is_email_conflict(e):
                log.write("CONFLICT", "duplicate_email")
                raise DuplicateEmailError(email) from e
            log.write("ERROR", str(e))
            raise StorageError(str(e)) from e
        except sqlite3.Error as e:
            log.write("ERROR", str(e))
            raise StorageError(str(e)) from e
        if matched == 0:
            log.write("NOT_FOUND")
            raise NotFoundError(student_id)
        log.write("OK")

    def delete(self, student_id: int, log: LogContext | None = None) -> None:
        """Deleting an id that does not exist is a no-op success."""
        student_id = _check_id(student_id)
        if student_id > MAX_ID:
            return
        log = log or LogContext("DELETE_STUDENT")
        log.set_entity("student", student_id)
        try:
            with self.storage.connection() as conn:
                removed = student_repo.delete(conn, student_id)
        except sqlite3.Error as e:
            log.write("ERROR", str(e))
            raise StorageError(str(e)) from e
        log.set_payload({"removed": removed})
        log.write("OK")

