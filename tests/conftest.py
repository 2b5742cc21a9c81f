"""Pytest configuration and fixtures."""
import os

# Keep the application away from any real database or verifier during tests
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["SELF_VERIFIER_URL"] = "http://verifier.test/verify"
os.environ["REGISTER_RATE_LIMIT"] = "10000/minute"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from self_olympics.database.database import Database
from self_olympics.utils.self_verifier import IdentityVerifier, VerificationOutcome


class FakeVerifier(IdentityVerifier):
    """Returns a preset outcome and remembers what it was asked to verify."""

    def __init__(self):
        self.outcome = VerificationOutcome(valid=True, nationality="BRA", identifier="nullifier-1")
        self.calls = []

    async def verify(self, attestation_id, proof, public_signals, user_context_data):
        self.calls.append(
            {
                "attestation_id": attestation_id,
                "proof": proof,
                "public_signals": public_signals,
                "user_context_data": user_context_data,
            }
        )
        return self.outcome


@pytest.fixture
def database():
    """In-memory database shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    database = Database(engine=engine)
    database.create_all()

    yield database

    database.dispose()


@pytest.fixture
def db_session(database):
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def client(database, verifier):
    """Test client wired to the test database and the fake verifier."""
    from main import app

    app.state.database = database
    app.state.verifier = verifier

    # not entered as a context manager: startup would replace the test database
    return TestClient(app)


@pytest.fixture
def proof_payload():
    return {
        "attestationId": 1,
        "proof": {"a": ["1", "2"], "b": [["3", "4"], ["5", "6"]], "c": ["7", "8"]},
        "publicSignals": ["9", "10", "11"],
        "userContextData": "000000000000000000000000000000000000000000000000000000000000a4ec",
    }
