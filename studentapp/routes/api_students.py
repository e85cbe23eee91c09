from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from ..deps import get_repository
from ..errors import StorageError
from ..services.student_svc import StudentRepository
from ..validation import MAX_ID

router = APIRouter()


class StudentOut(BaseModel):
    id: int
    name: str
    email: str
    course: str
    created_at: Optional[datetime] = None


class StudentListOut(BaseModel):
    total: int
    items: list[StudentOut]


@router.get("/api/students", response_model=StudentListOut)
def api_students_list(repo: StudentRepository = Depends(get_repository)):
    try:
        students = repo.list()
    except StorageError:
        raise HTTPException(status_code=500, detail="storage_error")
    items = [StudentOut(**s.to_dict()) for s in students]
    return {"total": len(items), "items": items}


@router.get("/api/students/{student_id}", response_model=StudentOut)
def api_students_get(student_id: int = Path(..., ge=1, le=MAX_ID), repo: StudentRepository = Depends(get_repository)):
    try:
        student = repo.get_by_id(student_id)
    except StorageError:
        raise HTTPException(status_code=500, detail="storage_error")
    if student is None:
        raise HTTPException(status_code=404, detail="student_not_found")
    return StudentOut(**student.to_dict())
