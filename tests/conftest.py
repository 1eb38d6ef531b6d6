"""
StudLyf — общие фикстуры pytest.

- In-memory SQLite на каждый тест (движок подменяет get_db)
- Поддельная проверка токена: bearer-токен == uid, токены "bad*" отклоняются
- auth(uid) — заголовок Authorization для запроса от имени uid
"""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EXPIRY_SWEEP_ENABLED"] = "0"

from typing import Callable, Dict, Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from src.db import Base, engine_options, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.utils.firebase_auth import InvalidToken, get_token_verifier  # noqa: E402


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def anyio_backend() -> str:
    """Асинхронные тесты (@pytest.mark.anyio) гоняем на asyncio."""
    return "asyncio"


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def engine():
    """Свежая in-memory БД на каждый тест."""
    eng = create_engine("sqlite://", **engine_options("sqlite://"))
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory) -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------


def _fake_verify(token: str) -> str:
    if token.startswith("bad"):
        raise InvalidToken("signature mismatch")
    return token


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_token_verifier] = lambda: _fake_verify
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth() -> Callable[[str], Dict[str, str]]:
    """Заголовки запроса от имени uid."""
    def _headers(uid: str) -> Dict[str, str]:
        return {"Authorization": f"Bearer {uid}"}
    return _headers
