import os
import sys

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Add backend to path if not already there
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from main import app
from database import Base, get_db
from models import User, Friendship, FriendshipData
from auth import get_password_hash, create_access_token
from dependencies import get_notifier

# Setup in-memory SQLite database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class RecordingNotifier:
    """Stands in for the push notifier and remembers what it was asked to send."""

    def __init__(self):
        self.notified = []

    def notify(self, db, t):
        self.notified.append((t.id, t.amount, t.memo))


class ImmediateExecutor:
    """Runs submitted work inline so push calls can be asserted on."""

    def submit(self, fn, *args, **kwargs):
        return fn(*args, **kwargs)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def notifier():
    return RecordingNotifier()

@pytest.fixture(scope="function")
def client(db_session, notifier):
    """Create a FastAPI TestClient with overridden database and notifier dependencies."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.pop(get_db, None)
    app.dependency_overrides.pop(get_notifier, None)

def make_user(db_session, email, full_name):
    user = User(
        email=email,
        hashed_password=get_password_hash("password123"),
        full_name=full_name,
        is_active=True
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user

@pytest.fixture
def test_user(db_session):
    """Create a test user and return the user object."""
    return make_user(db_session, "test@example.com", "Test User")

@pytest.fixture
def other_user(db_session):
    return make_user(db_session, "other@example.com", "Other User")

@pytest.fixture
def auth_headers(test_user):
    """Return authorization headers for the test user."""
    access_token = create_access_token(data={"sub": test_user.email})
    return {"Authorization": f"Bearer {access_token}"}

@pytest.fixture
def other_headers(other_user):
    access_token = create_access_token(data={"sub": other_user.email})
    return {"Authorization": f"Bearer {access_token}"}

@pytest.fixture
def friendship(db_session, test_user, other_user):
    """Friendship between test_user and other_user, balance tracked for test_user."""
    f = Friendship(user_id1=test_user.id, user_id2=other_user.id)
    db_session.add(f)
    db_session.flush()
    db_session.add(FriendshipData(friendship_id=f.id, positive_user_id=test_user.id, balance=0))
    db_session.commit()
    db_session.refresh(f)
    return f

def get_balance(db_session, friendship_id):
    db_session.expire_all()
    fd = db_session.query(FriendshipData).filter(FriendshipData.friendship_id == friendship_id).first()
    return fd.balance
