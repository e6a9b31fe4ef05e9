import os
import sys
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend to sys.path so we can import exam_scoring without installing it
BACKEND_PATH = Path(__file__).resolve().parent.parent / "backend"
if BACKEND_PATH.as_posix() not in sys.path:
    sys.path.insert(0, BACKEND_PATH.as_posix())

# Settings are read at import time: keep tests local and off the remote scorer
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("AI_SCORING_URL", None)

from exam_scoring.db import Base, get_db  # noqa: E402
from exam_scoring.main import app  # noqa: E402
from exam_scoring.remote_scorer import RemoteScoringClient, get_remote_client  # noqa: E402

REMOTE_URL = "http://scorer.test/score_exam"


def make_remote_client(handler, timeout: float = 5.0) -> RemoteScoringClient:
    """Build a RemoteScoringClient whose HTTP traffic is served by ``handler``."""
    return RemoteScoringClient(REMOTE_URL, timeout=timeout, transport=httpx.MockTransport(handler))


# Common test fixtures
@pytest.fixture
def db_session():
    """In-memory SQLite session shared across threads."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def api_client(db_session):
    """TestClient with the database overridden and no remote scorer."""

    def _get_db():
        yield db_session

    async def _no_remote():
        yield None

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_remote_client] = _no_remote
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def use_remote():
    """Route the app's remote scorer to ``handler`` for the rest of the test."""

    def _install(handler, timeout: float = 5.0):
        async def _remote():
            client = make_remote_client(handler, timeout=timeout)
            try:
                yield client
            finally:
                await client.aclose()

        app.dependency_overrides[get_remote_client] = _remote

    return _install


@pytest.fixture
def sky_answer():
    """The sky-is-blue answer in wire format."""
    return {
        "question_id": "q1",
        "key_answer": "The sky is blue",
        "student_answer": "sky is blue",
        "max_score": 10,
    }
