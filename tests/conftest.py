from __future__ import annotations

import itertools
import os
import tempfile
from pathlib import Path

_TEST_DIR = Path(tempfile.mkdtemp(prefix="recruitment-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TEST_DIR / 'test.db'}"
os.environ["DATA_DIR"] = str(_TEST_DIR)
os.environ["APP_ENV"] = "test"
os.environ["SECRET_KEY"] = "integration-test-secret-0123456789abcdef"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from recruitment.api.app import create_app  # noqa: E402
from recruitment.core.workflow import ApplicationWorkflow  # noqa: E402
from recruitment.db import models  # noqa: E402,F401
from recruitment.db.base import Base  # noqa: E402
from recruitment.db.seed import seed_competences  # noqa: E402
from recruitment.db.session import SessionLocal, engine  # noqa: E402
from recruitment.types import Role  # noqa: E402

PASSWORD = "password123"


@pytest.fixture(autouse=True)
def reset_db() -> None:
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        seed_competences(session)
    yield


@pytest.fixture
def db():
    with SessionLocal() as session:
        yield session


@pytest.fixture
def workflow(db) -> ApplicationWorkflow:
    return ApplicationWorkflow(db)


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())


@pytest.fixture
def make_person(workflow):
    counter = itertools.count(1)

    def _make(
        username: str,
        *,
        name: str = "Britta",
        surname: str = "Ann",
        role: Role = Role.APPLICANT,
    ):
        serial = next(counter)
        return workflow.create_account(
            name=name,
            surname=surname,
            pnr=f"{199001010000 + serial:012d}",
            email=f"{username.lower()}@example.com",
            username=username,
            password=PASSWORD,
            role=role,
        )

    return _make


@pytest.fixture
def sign_in(client):
    def _sign_in(username: str, password: str = PASSWORD):
        return client.post("/account/sign_in", json={"username": username, "password": password})

    return _sign_in
