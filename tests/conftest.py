import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from planvision.main import create_app
from planvision.models.schemas import SessionInfo, SessionUser, UserSession
from planvision.services.auth import SupabaseAuthProvider, extract_bearer_token
from planvision.services.repository import MemoryRepositoryFactory
from planvision.services.storage import StorageService

ALICE_TOKEN = "alice-token"
BOB_TOKEN = "bob-token"


def make_session(user_id: str, email=None, name: str = "") -> UserSession:
    return UserSession(
        session=SessionInfo(id=f"session-{user_id}", expires_at=datetime(2030, 1, 1, tzinfo=timezone.utc)),
        user=SessionUser(id=user_id, email=email, name=name),
    )


ALICE = make_session("user-alice-0001", "alice@example.com", "Alice")
BOB = make_session("user-bob-0002", "bob@example.com", "Bob")


class FakeResolver:
    """Maps fixed bearer tokens to sessions."""

    def __init__(self, sessions):
        self.sessions = sessions

    def resolve(self, headers):
        token = extract_bearer_token(headers)
        return self.sessions.get(token) if token else None


@pytest.fixture
def repositories():
    return MemoryRepositoryFactory()


@pytest.fixture
def storage_client():
    client = MagicMock()
    client.bucket.return_value.blob.return_value.generate_signed_url.return_value = (
        "https://storage.googleapis.com/test-bucket/signed?X-Goog-Signature=abc"
    )
    return client


@pytest.fixture
def storage(storage_client):
    return StorageService(
        bucket_name="test-bucket",
        project_id="test-project",
        public_domain="",
        client=storage_client,
    )


@pytest.fixture
def auth_provider():
    return MagicMock(spec=SupabaseAuthProvider)


@pytest.fixture
def resolver():
    return FakeResolver({ALICE_TOKEN: ALICE, BOB_TOKEN: BOB})


@pytest.fixture
def app(repositories, resolver, storage, auth_provider):
    return create_app(
        repositories=repositories,
        session_resolver=resolver,
        storage=storage,
        auth_provider=auth_provider,
    )


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def alice_headers():
    return {"Authorization": f"Bearer {ALICE_TOKEN}"}


@pytest.fixture
def bob_headers():
    return {"Authorization": f"Bearer {BOB_TOKEN}"}
