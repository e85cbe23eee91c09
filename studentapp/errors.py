"""Error taxonomy shared by the repository and the request handlers."""
from __future__ import annotations


class StudentAppError(Exception):
    """Base class for every error raised by the data-access layer."""


class ValidationError(StudentAppError):
    """Caller-fixable, field-level problem (empty field, bad email, bad id)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateEmailError(StudentAppError):
    """Another student already uses this email."""

    def __init__(self, email: str):
        super().__init__(f"duplicate_email: {email}")
        self.email = email


class NotFoundError(StudentAppError):
    """No student with the referenced id."""

    def __init__(self, student_id: int):
        super().__init__(f"student_not_found: {student_id}")
        self.student_id = student_id


class StorageError(StudentAppError):
    """Connectivity, permission or disk fault in the backing store."""
