import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from app.auth.models import User
from app.auth.service import create_token
from app.core.database import Base, get_db
from app.core.dependency import get_alert_dispatcher
from app.core.exceptions import NotificationDispatchFailed
from app.quotes.db import seed_quotes


class FakeDispatcher:
    def __init__(self, fail=False):
        self.fail = fail
        self.alerts = []

    def dispatch_alert(self, alert):
        self.alerts.append(alert)
        if self.fail:
            raise NotificationDispatchFailed("smtp down")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed_quotes(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def client(db, session_factory, dispatcher):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_alert_dispatcher] = lambda: dispatcher
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(email="ada@example.com", trusted_email="friend@example.com", name="Ada"):
        user = User(id=uuid.uuid4(), name=name, email=email, trusted_email=trusted_email)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def auth_headers(user):
    return {"Authorization": f"Bearer {create_token(user.id)}"}
