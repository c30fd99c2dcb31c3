import sys
import os

# Add the current directory to Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import copy

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.db.base  # noqa: F401
from app.db.base_class import Base
from app.repositories.student_repository import StudentRepository
from app.schemas.students import validate_student_payload

# bcrypt's minimum cost keeps the suite fast
TEST_SALT_ROUNDS = 4

VALID_PAYLOAD = {
    "id": "S-2026-0001",
    "password": "secret123",
    "name": {"firstName": "Alice", "middleName": "Maria", "lastName": "Lima"},
    "gender": "female",
    "dateOfBirth": "2008-03-14",
    "email": "student@example.com",
    "contactNo": "01700000000",
    "emergencyContactNo": "01800000000",
    "bloodGroup": "O+",
    "presentAddress": "12 Main Street",
    "permanentAddress": "12 Main Street",
    "guardian": {
        "fatherName": "John",
        "fatherOccupation": "Engineer",
        "fatherContactNo": "01711111111",
        "motherName": "Mary",
        "motherOccupation": "Teacher",
        "motherContactNo": "01722222222",
    },
    "localGuardian": {
        "name": "Joana Souza",
        "occupation": "Nurse",
        "contactNo": "01733333333",
        "address": "40 Park Avenue",
    },
}


@pytest.fixture
def payload():
    """A fresh copy of a payload that satisfies every rule."""
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def make_student(payload):
    """Build an unsaved Student from the valid payload plus top-level overrides."""
    def _make(**overrides):
        data = copy.deepcopy(payload)
        data.update(overrides)
        return validate_student_payload(data).to_model()
    return _make


@pytest.fixture
def engine():
    """Create an in-memory SQLite database for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(engine):
    """Create a database session for each test."""
    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def repo(db_session):
    return StudentRepository(db_session, salt_rounds=TEST_SALT_ROUNDS)
