import os
import sys

import pytest
from fastapi.testclient import TestClient

BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENV", "dev")
# tables are created per test below, not by the app lifespan
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")

import portal.models  # noqa: E402,F401
from portal.db.base import Base  # noqa: E402
from portal.db.session import SessionLocal, engine  # noqa: E402

from main import app  # noqa: E402


@pytest.fixture()
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db(schema):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(schema):
    with TestClient(app) as test_client:
        yield test_client
