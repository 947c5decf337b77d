"""
Test configuration and fixtures
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import datetime, timezone
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from database.connection import Base, get_db

# Import all models BEFORE importing app to ensure they're registered
from models.room import Room
from models.user import User, UserRole
from models.booking import Booking

from main import app
from routes.bookings import get_booking_validator
from utils.auth import create_access_token
from utils.booking_validator import BookingValidator

# Test database (file-based SQLite for better connection handling)
TEST_DATABASE_URL = "sqlite:///./test.db"

# Every booking test runs at this instant, so dates in January 2025 are in the future
FIXED_NOW = datetime(2025, 1, 9, 12, 0, tzinfo=timezone.utc)

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    echo=False  # Set to True to debug SQL
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    """Create a test client with test database and a frozen clock"""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_booking_validator] = lambda: BookingValidator(clock=lambda: FIXED_NOW)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    """Factory inserting a user straight into the database"""
    def _make(username, role=UserRole.USER, password="secret123"):
        user = User(
            username=username,
            email=f"{username}@example.com",
            password_hash=User.hash_password(password),
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_room(db_session):
    """Factory inserting a room straight into the database"""
    def _make(name="Conference Room A", capacity=10, **extra):
        room = Room(name=name, capacity=capacity, **extra)
        db_session.add(room)
        db_session.commit()
        db_session.refresh(room)
        return room
    return _make


@pytest.fixture
def auth_headers():
    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user)}"}
    return _headers


@pytest.fixture
def admin(make_user):
    return make_user("admin", role=UserRole.ADMIN)


@pytest.fixture
def alice(make_user):
    return make_user("alice")


@pytest.fixture
def bob(make_user):
    return make_user("bob")


@pytest.fixture
def session_factory(db_session):
    """Sessionmaker on the test database, for tests that need one session per request"""
    return TestingSessionLocal
