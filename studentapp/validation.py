"""
Pre-write checks on user-supplied student fields.

Pure functions: nothing here touches storage or logging. `validate` trims the
three fields, then applies the rules in a fixed order and stops at the first
failure, so at most one message is produced.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from .domain.student import StudentInput

REQUIRED_MESSAGE = "All fields are required."
INVALID_EMAIL_MESSAGE = "Please enter a valid email address."

_ATEXT = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~-]"
_LOCAL_RE = re.compile(rf"{_ATEXT}+(?:\.{_ATEXT}+)*")
_LABEL_RE = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?")

MAX_EMAIL_LEN = 254
MAX_LOCAL_LEN = 64

# largest value SQLite can store in an INTEGER column
MAX_ID = 2**63 - 1


@dataclass(frozen=True)
class ValidationResult:
    student: Optional[StudentInput] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _clean(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def is_valid_email(value: str) -> bool:
    if not value or len(value) > MAX_EMAIL_LEN or value.count("@") != 1:
        return False
    local, domain = value.split("@")
    if len(local) > MAX_LOCAL_LEN or not _LOCAL_RE.fullmatch(local):
        return False
    labels = domain.split(".")
    if len(labels) < 2:
        return False
    return all(_LABEL_RE.fullmatch(label) for label in labels)


def validate(name, email, course) -> ValidationResult:
    name, email, course = _clean(name), _clean(email), _clean(course)
    if not name or not email or not course:
        return ValidationResult(error=REQUIRED_MESSAGE)
    if not is_valid_email(email):
        return ValidationResult(error=INVALID_EMAIL_MESSAGE)
    return ValidationResult(student=StudentInput(name, email, course))


def parse_id(raw) -> int | None:
    """Coerce a query/form id to a positive int; None when missing or malformed."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if 0 < raw <= MAX_ID else None
    text = str(raw).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if 0 < value <= MAX_ID else None
