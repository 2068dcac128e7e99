import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("EMAIL_USERNAME", "")
os.environ.setdefault("EMAIL_APP_PASSWORD", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from account_verification.core import deps
from account_verification.core.settings import Settings, settings as app_settings
from account_verification.database import Base, get_db
from account_verification.domain.interfaces import AuditChannel
from account_verification.domain.verification import VerificationState, encode_verification
from account_verification.main import create_app
from account_verification.models import Member
from account_verification.utils import create_session_token


class FakeAuditLog:
    def __init__(self):
        self.entries = []

    def log(self, message, channel=AuditChannel.ERROR, *, print_=True):
        self.entries.append((message, channel, print_))

    def log_exception(self, message, exc, channel=AuditChannel.ERROR):
        self.entries.append((f"{message}: {exc!r}", channel, True))

    def on(self, channel):
        return [message for message, ch, _ in self.entries if ch is channel]


class FakeTransport:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    async def send(self, message):
        self.sent.append(message)
        if self.error is not None:
            raise self.error


class RecordingDispatcher:
    def __init__(self):
        self.calls = []

    def dispatch(self, user_id):
        self.calls.append(user_id)


def make_settings(**overrides):
    values = {
        "ENV": "dev",
        "DEV_BUILD": False,
        "HOST_NAME": "chess.example",
        "EMAIL_USERNAME": "",
        "EMAIL_APP_PASSWORD": "",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture()
def add_member(db_session):
    def _add(user_id=42, username="Alice", email="alice@chess.example", verification=VerificationState(False, "abc123")):
        blob = verification if isinstance(verification, str) or verification is None else encode_verification(verification)
        member = Member(user_id=user_id, username=username, email=email, verification=blob)
        db_session.add(member)
        db_session.commit()
        return member

    return _add


@pytest.fixture()
def audit():
    return FakeAuditLog()


@pytest.fixture()
def transport():
    return FakeTransport()


@pytest.fixture()
def test_settings():
    return make_settings()


@pytest.fixture()
def app(db_session, audit, transport, test_settings):
    application = create_app()

    def _get_db():
        yield db_session

    application.dependency_overrides[get_db] = _get_db
    application.dependency_overrides[deps.get_audit_log] = lambda: audit
    application.dependency_overrides[deps.get_transport] = lambda: transport
    application.dependency_overrides[deps.get_settings] = lambda: test_settings
    return application


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def sign_in(client):
    def _sign_in(user_id=42, username="Alice"):
        client.cookies.set(app_settings.AUTH_COOKIE_NAME, create_session_token(user_id, username))
        return client

    return _sign_in
