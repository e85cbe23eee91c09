from __future__ import annotations

import os

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates

from ..config import get_app_title
from ..deps import get_repository
from ..errors import DuplicateEmailError, NotFoundError, StorageError, StudentAppError
from ..logs import LogContext
from ..services.student_svc import StudentRepository
from ..validation import validate, parse_id

router = APIRouter()

templates = Jinja2Templates(directory=os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates"))

DUPLICATE_MESSAGE = "Email already exists. Please use a different email."
ADD_FAILED_MESSAGE = "Error adding student. Please try again."
UPDATE_FAILED_MESSAGE = "Error updating student. Please try again."
FETCH_FAILED_MESSAGE = "Error fetching student data."
LIST_FAILED_MESSAGE = "Error loading students. Please try again."

SUBMIT_LABELS = {
    "add.html": "Add Student",
    "edit.html": "Update Student",
}

LIST_ERRORS = {
    "delete_failed": "Could not delete the student. Please try again.",
}


def _to_list(error: str | None = None) -> RedirectResponse:
    url = "/" if not error else f"/?error={error}"
    return RedirectResponse(url, status_code=303)


def _render(request: Request, name: str, context: dict, status_code: int = 200):
    ctx = {"app_title": get_app_title(), "submit_label": SUBMIT_LABELS.get(name), **context}
    return templates.TemplateResponse(request, name, ctx, status_code=status_code)


def _form_values(name, email, course) -> dict:
    return {"name": name or "", "email": email or "", "course": course or ""}


@router.get("/")
def page_list(request: Request, error: str | None = None, repo: StudentRepository = Depends(get_repository)):
    try:
        students = repo.list()
    except StorageError:
        return _render(request, "index.html", {"students": [], "error": LIST_FAILED_MESSAGE}, status_code=500)
    return _render(request, "index.html", {"students": students, "error": LIST_ERRORS.get(error or "")})


@router.get("/add")
def page_add(request: Request):
    return _render(request, "add.html", {"form": _form_values(None, None, None), "error": None})


@router.post("/add")
def page_add_submit(
    request: Request,
    name: str | None = Form(None),
    email: str | None = Form(None),
    course: str | None = Form(None),
    repo: StudentRepository = Depends(get_repository),
):
    form = _form_values(name, email, course)
    result = validate(name, email, course)
    if not result.ok:
        LogContext("CREATE_STUDENT").write("REJECTED", result.error)
        return _render(request, "add.html", {"form": form, "error": result.error}, status_code=400)
    try:
        repo.create(*result.student)
    except DuplicateEmailError:
        return _render(request, "add.html", {"form": form, "error": DUPLICATE_MESSAGE}, status_code=409)
    except StorageError:
        return _render(request, "add.html", {"form": form, "error": ADD_FAILED_MESSAGE}, status_code=500)
    return _to_list()


@router.get("/edit")
def page_edit(request: Request, id: str | None = Query(None), repo: StudentRepository = Depends(get_repository)):
    student_id = parse_id(id)
    if student_id is None:
        return _to_list()
    try:
        student = repo.get_by_id(student_id)
    except StorageError:
        return _render(
            request, "edit.html",
            {"student_id": student_id, "form": _form_values(None, None, None), "error": FETCH_FAILED_MESSAGE},
            status_code=500,
        )
    if student is None:
        return _to_list()
    form = _form_values(student.name, student.email, student.course)
    return _render(request, "edit.html", {"student_id": student_id, "form": form, "error": None})


@router.post("/edit")
def page_edit_submit(
    request: Request,
    id: str | None = Query(None),
    name: str | None = Form(None),
    email: str | None = Form(None),
    course: str | None = Form(None),
    repo: StudentRepository = Depends(get_repository),
):
    student_id = parse_id(id)
    if student_id is None:
        return _to_list()
    form = _form_values(name, email, course)
    result = validate(name, email, course)
    if not result.ok:
        LogContext("UPDATE_STUDENT").write("REJECTED", result.error)
        return _render(request, "edit.html", {"student_id": student_id, "form": form, "error": result.error}, status_code=400)
    try:
        repo.update(student_id, *result.student)
    except NotFoundError:
        return _to_list()
    except DuplicateEmailError:
        return _render(request, "edit.html", {"student_id": student_id, "form": form, "error": DUPLICATE_MESSAGE}, status_code=409)
    except StorageError:
        return _render(request, "edit.html", {"student_id": student_id, "form": form, "error": UPDATE_FAILED_MESSAGE}, status_code=500)
    return _to_list()


def _delete(raw_id, repo: StudentRepository) -> RedirectResponse:
    student_id = parse_id(raw_id)
    if student_id is None:
        return _to_list()
    try:
        repo.delete(student_id)
    except StudentAppError:
        return _to_list("delete_failed")
    return _to_list()


@router.get("/delete")
def action_delete(id: str | None = Query(None), repo: StudentRepository = Depends(get_repository)):
    return _delete(id, repo)


@router.post("/delete")
def action_delete_submit(
    request: Request,
    id: str | None = Form(None),
    repo: StudentRepository = Depends(get_repository),
):
    return _delete(id or request.query_params.get("id"), repo)
