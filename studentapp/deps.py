from __future__ import annotations

from fastapi import Request

from .services.student_svc import StudentRepository


def get_repository(request: Request) -> StudentRepository:
    """The repository built once in create_app and shared by every handler."""
    return request.app.state.repository
