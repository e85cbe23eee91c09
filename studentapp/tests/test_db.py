import sqlite3

import pytest

from studentapp import db
from studentapp.db import StorageHandle, get_db_path, open_storage
from studentapp.errors import StorageError


def test_schema_created_on_open(storage):
    with storage.connection() as conn:
        cols = [(c["name"], c["type"], c["notnull"], c["pk"]) for c in conn.execute("PRAGMA table_info(students)")]
        ddl = conn.execute("SELECT sql FROM sqlite_master WHERE type='table' AND name='students'").fetchone()["sql"]
    assert cols == [
        ("id", "INTEGER", 0, 1),
        ("name", "TEXT", 1, 0),
        ("email", "TEXT", 1, 0),
        ("course", "TEXT", 1, 0),
        ("created_at", "DATETIME", 0, 0),
    ]
    assert "AUTOINCREMENT" in ddl
    assert "UNIQUE" in ddl
    assert "CURRENT_TIMESTAMP" in ddl


def test_reopen_keeps_existing_rows(tmp_path):
    path = str(tmp_path / "students.db")
    h1 = StorageHandle(path)
    with h1.connection() as conn:
        conn.execute("INSERT INTO students(name, email, course) VALUES(?,?,?)", ("A", "a@x.com", "CS"))
    h1.close()

    h2 = StorageHandle(path)
    with h2.connection() as conn:
        assert conn.execute("SELECT COUNT(1) FROM students").fetchone()[0] == 1
    h2.close()


def test_unopenable_store_is_storage_error(tmp_path):
    with pytest.raises(StorageError):
        StorageHandle(str(tmp_path / "no-such-dir" / "students.db"))


def test_schema_failure_is_storage_error(tmp_path):
    # a file that is not a database
    path = tmp_path / "garbage.db"
    path.write_bytes(b"this is definitely not sqlite" * 100)
    with pytest.raises(StorageError):
        StorageHandle(str(path))


def test_get_db_path_env_override(tmp_path, monkeypatch):
    target = tmp_path / "nested" / "dir" / "s.db"
    monkeypatch.setenv("STUDENTAPP_DB_PATH", str(target))
    assert get_db_path() == str(target)
    assert target.parent.is_dir()


def test_get_db_path_from_config(tmp_path, monkeypatch):
    cfg = tmp_path / "config.yaml"
    cfg.write_text(
        f"db_path: {tmp_path / 'prod.db'}\ntest_db_path: {tmp_path / 'test.db'}\n",
        encoding="utf-8",
    )
    monkeypatch.delenv("STUDENTAPP_DB_PATH", raising=False)
    monkeypatch.setenv("STUDENTAPP_CONFIG", str(cfg))

    # PYTEST_CURRENT_TEST is set while tests run
    assert get_db_path() == str(tmp_path / "test.db")

    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    assert get_db_path() == str(tmp_path / "prod.db")


def test_get_db_path_fallback(tmp_path, monkeypatch):
    monkeypatch.delenv("STUDENTAPP_DB_PATH", raising=False)
    monkeypatch.setenv("STUDENTAPP_CONFIG", str(tmp_path / "missing.yaml"))
    assert get_db_path() == db._ROOT_DB


def test_memory_path_passes_through(monkeypatch):
    monkeypatch.setenv("STUDENTAPP_DB_PATH", ":memory:")
    assert get_db_path() == ":memory:"


def test_open_storage_uses_resolved_path(tmp_path, monkeypatch):
    monkeypatch.setenv("STUDENTAPP_DB_PATH", str(tmp_path / "s.db"))
    handle = open_storage()
    try:
        assert handle.path == str(tmp_path / "s.db")
        with handle.connection() as conn:
            assert isinstance(conn, sqlite3.Connection)
    finally:
        handle.close()
