# captcha_backend/tests/conftest.py
import os
# settings are read from env at import time
os.environ.setdefault("RECAPTCHA_SECRET_KEY", "test-secret")
os.environ.setdefault("RECAPTCHA_SITE_KEY", "test-site-key")
os.environ.setdefault("RECAPTCHA_THRESHOLD", "0.5")
os.environ.setdefault("RECAPTCHA_ACTION", "submit")
os.environ.setdefault("DB_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import List
import pytest
import requests
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from captcha_backend.db_models import Base
from captcha_backend.recaptcha import VerificationResult

class FakeRecaptcha:
    """Stands in for RecaptchaClient; returns a canned outcome and records tokens."""

    def __init__(self, outcome=None):
        self.outcome = outcome if outcome is not None else VerificationResult(success=True, score=0.9, action="submit")
        self.tokens: List[str] = []

    def verify(self, token):
        self.tokens.append(token)
        return self.outcome

class FakeSession:
    """Minimal requests.Session double: replays a body or raises."""

    def __init__(self, body: bytes = b"", status: int = 200, exc: Exception = None):
        self.body = body
        self.status = status
        self.exc = exc
        self.calls = []

    def post(self, url, data=None, timeout=None):
        self.calls.append({"url": url, "data": data, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        r = requests.Response()
        r.status_code = self.status
        r._content = self.body
        r.headers["Content-Type"] = "application/json"
        return r

@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    yield factory
    engine.dispose()

@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()

@pytest.fixture
def fake_recaptcha():
    return FakeRecaptcha()

@pytest.fixture
def client(session_factory, fake_recaptcha):
    from captcha_backend.app import app, get_recaptcha
    from captcha_backend.db import get_db

    def _get_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_recaptcha] = lambda: fake_recaptcha
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
