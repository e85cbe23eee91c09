from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from sqlite3 import Row
from typing import Any, NamedTuple


class StudentInput(NamedTuple):
    name: str
    email: str
    course: str


@dataclass(frozen=True)
class Student:
    id: int
    name: str
    email: str
    course: str
    created_at: datetime | None

    @classmethod
    def from_row(cls, row: Row) -> "Student":
        return cls(
            id=int(row["id"]),
            name=row["name"],
            email=row["email"],
            course=row["course"],
            created_at=parse_created_at(row["created_at"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "course": self.course,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


def parse_created_at(raw) -> datetime | None:
    """CURRENT_TIMESTAMP is stored as 'YYYY-MM-DD HH:MM:SS' in UTC."""
    if raw is None:
        return None
    if isinstance(raw, datetime):
        value = raw
    else:
        value = datetime.fromisoformat(str(raw))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value
