#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StudentApp management commands (SQLite)

Commands:
  init-db             Create the store and the students table
  list                Print all students, newest first
  add                 Validate and add a student
  delete              Delete a student by id (missing ids are fine)
  serve               Run the web app with uvicorn

Notes:
- Store commands accept --db to point at a specific store; otherwise the
  path comes from STUDENTAPP_DB_PATH or config.yaml.
"""
from __future__ import annotations

import argparse
import sys

from .config import get_log_level
from .db import open_storage
from .errors import DuplicateEmailError, StorageError
from .logs import configure_logging
from .services.student_svc import StudentRepository
from .validation import validate


def _repo(args) -> StudentRepository:
    return StudentRepository(open_storage(args.db))


# ---------------- Commands ----------------

def cmd_init_db(args):
    handle = open_storage(args.db)
    handle.close()
    print(f"Store initialized at {handle.path}.")
    return 0


def cmd_list(args):
    repo = _repo(args)
    try:
        students = repo.list()
    finally:
        repo.storage.close()
    if not students:
        print("No students found.")
        return 0
    for s in students:
        created = s.created_at.strftime("%Y-%m-%d %H:%M:%S") if s.created_at else ""
        print(f"{s.id}\t{s.name}\t{s.email}\t{s.course}\t{created}")
    return 0


def cmd_add(args):
    result = validate(args.name, args.email, args.course)
    if not result.ok:
        print(result.error, file=sys.stderr)
        return 1
    repo = _repo(args)
    try:
        new_id = repo.create(*result.student)
    except DuplicateEmailError:
        print("Email already exists. Please use a different email.", file=sys.stderr)
        return 1
    finally:
        repo.storage.close()
    print(new_id)
    return 0


def cmd_delete(args):
    if args.id < 1:
        print("Student id must be a positive integer.", file=sys.stderr)
        return 1
    repo = _repo(args)
    try:
        repo.delete(args.id)
    finally:
        repo.storage.close()
    print("Deleted.")
    return 0


def cmd_serve(args):
    import uvicorn

    uvicorn.run("studentapp.api:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="studentapp", description="Student record management")
    sub = p.add_subparsers(dest="cmd", required=True)

    def with_db(sp):
        sp.add_argument("--db", default=None, help="path to the SQLite store")
        return sp

    with_db(sub.add_parser("init-db", help="create the store and schema")).set_defaults(func=cmd_init_db)
    with_db(sub.add_parser("list", help="list students")).set_defaults(func=cmd_list)

    sp = with_db(sub.add_parser("add", help="add a student"))
    sp.add_argument("name")
    sp.add_argument("email")
    sp.add_argument("course")
    sp.set_defaults(func=cmd_add)

    sp = with_db(sub.add_parser("delete", help="delete a student"))
    sp.add_argument("id", type=int)
    sp.set_defaults(func=cmd_delete)

    sp = sub.add_parser("serve", help="run the web app")
    sp.add_argument("--host", default="127.0.0.1")
    sp.add_argument("--port", type=int, default=8000)
    sp.set_defaults(func=cmd_serve)
    return p


def main(argv=None) -> int:
    configure_logging(get_log_level())
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except StorageError as e:
        print(f"Storage error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
