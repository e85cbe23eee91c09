import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture()
def storage():
    # Fresh in-memory store per test; nothing is written to disk
    from studentapp.db import StorageHandle
    handle = StorageHandle(":memory:")
    yield handle
    handle.close()


@pytest.fixture()
def repo(storage):
    from studentapp.services.student_svc import StudentRepository
    return StudentRepository(storage)


@pytest.fixture()
def client(storage):
    from studentapp.api import create_app
    from fastapi.testclient import TestClient
    return TestClient(create_app(storage=storage))
