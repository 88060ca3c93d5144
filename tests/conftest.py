"""Shared fixtures: in-memory datastore fakes, a fake auth service and a test client.

The application is exercised through ``app.dependency_overrides`` so no
database or auth service is needed. ``TestClient`` is used without entering its
context manager, which keeps the lifespan (pool creation) from running.
"""

import asyncio
import os
from datetime import datetime, timedelta, timezone

os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-for-unit-tests-0123456789")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("STATE_SIGNING_KEY", "test-state-signing-key")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")
os.environ.setdefault("BACKEND_URL", "http://testserver")
os.environ.setdefault("COOKIE_SECURE", "false")

import jwt  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from orgchat.auth.client import AuthProviderError  # noqa: E402
from orgchat.constants.seed_data import SEED_ORGANIZATIONS  # noqa: E402
from orgchat.core.dependencies import (  # noqa: E402
    get_auth_client,
    get_message_repository,
    get_organization_repository,
    get_user_repository,
)
from orgchat.core.exceptions import ConflictError, DatastoreError  # noqa: E402
from orgchat.core.settings import settings  # noqa: E402
from orgchat.dtos.message_dtos import CreateMessageDTO  # noqa: E402
from orgchat.dtos.user_dtos import CreateUserDTO  # noqa: E402
from orgchat.main import app  # noqa: E402
from orgchat.models.identity import AuthSession, Identity  # noqa: E402
from orgchat.models.message import Message, MessageWithAuthor  # noqa: E402
from orgchat.models.organization import Organization  # noqa: E402
from orgchat.models.user import User  # noqa: E402

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryStore:
    def __init__(self):
        self.organizations: dict[str, Organization] = {}
        self.users: dict[str, User] = {}
        self.messages: list[Message] = []

    def add_organization(self, org_id: str, name: str) -> Organization:
        organization = Organization(id=org_id, name=name)
        self.organizations[org_id] = organization
        return organization

    def add_user(self, user_id: str, email: str, organization_id: str) -> User:
        user = User(id=user_id, email=email, organization_id=organization_id)
        self.users[user_id] = user
        return user

    def seed(self) -> None:
        for org in SEED_ORGANIZATIONS:
            self.add_organization(org.id, org.name)
            self.add_user(org.bot_user_id, org.bot_email, org.id)


class FakeOrganizationRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store

    async def list_all(self) -> list[Organization]:
        return sorted(self._store.organizations.values(), key=lambda org: org.id)

    async def find_by_id(self, org_id: str) -> Organization | None:
        return self._store.organizations.get(org_id)


class FakeUserRepository:
    """Yields to the event loop on reads so concurrent callers interleave."""

    def __init__(self, store: InMemoryStore):
        self._store = store
        self.insert_error: DatastoreError | None = None
        self.return_none_on_create = False
        self.create_calls = 0

    async def find_by_id(self, user_id: str) -> User | None:
        user = self._store.users.get(user_id)
        await asyncio.sleep(0)
        return user

    async def create(self, dto: CreateUserDTO) -> User | None:
        self.create_calls += 1
        if self.insert_error is not None:
            raise self.insert_error
        if dto.id in self._store.users:
            raise ConflictError(f'duplicate key value violates unique constraint "User_pkey" ({dto.id})')
        user = User(
            id=dto.id,
            email=dto.email,
            role=dto.role,
            organization_id=dto.organization_id,
        )
        if self.return_none_on_create:
            return None
        self._store.users[dto.id] = user
        return user


class FakeMessageRepository:
    def __init__(self, store: InMemoryStore):
        self._store = store
        self.insert_error: DatastoreError | None = None
        self.fail_for_user_ids: set[str] = set()

    async def create(self, dto: CreateMessageDTO) -> Message:
        if self.insert_error is not None or dto.user_id in self.fail_for_user_ids:
            raise self.insert_error or DatastoreError("insert rejected")
        message = Message(
            id=dto.id,
            content=dto.content,
            user_id=dto.user_id,
            organization_id=dto.organization_id,
            created_at=BASE_TIME + timedelta(seconds=len(self._store.messages)),
        )
        self._store.messages.append(message)
        return message

    async def list_by_organization(self, organization_id: str) -> list[MessageWithAuthor]:
        messages = sorted(
            (m for m in self._store.messages if m.organization_id == organization_id),
            key=lambda m: m.created_at,
        )
        return [
            MessageWithAuthor(
                **message.model_dump(),
                author_email=(
                    self._store.users[message.user_id].email
                    if message.user_id in self._store.users
                    else None
                ),
            )
            for message in messages
        ]


class FakeAuthClient:
    def __init__(self):
        self.calls: list[tuple[str, dict]] = []
        self.sign_up_session: AuthSession | None = None
        self.sign_up_identity = Identity(id="new-user-id", email="new@example.com")
        self.session: AuthSession | None = None
        self.error: AuthProviderError | None = None

    def _record(self, name: str, **kwargs) -> None:
        self.calls.append((name, kwargs))
        if self.error is not None:
            raise self.error

    def calls_named(self, name: str) -> list[dict]:
        return [kwargs for call, kwargs in self.calls if call == name]

    async def sign_up(self, email, password, redirect_to=None):
        self._record("sign_up", email=email, password=password, redirect_to=redirect_to)
        return self.sign_up_identity, self.sign_up_session

    async def sign_in_with_password(self, email, password):
        self._record("sign_in_with_password", email=email, password=password)
        return self.session

    async def sign_in_with_otp(self, email, redirect_to=None, create_user=False):
        self._record("sign_in_with_otp", email=email, redirect_to=redirect_to)

    async def verify_otp(self, token_hash, otp_type):
        self._record("verify_otp", token_hash=token_hash, otp_type=otp_type)
        return self.session

    async def refresh_session(self, refresh_token):
        self._record("refresh_session", refresh_token=refresh_token)
        return self.session

    async def sign_out(self, access_token):
        self._record("sign_out", access_token=access_token)

    async def get_user(self, access_token):
        self._record("get_user", access_token=access_token)
        return self.session.user if self.session else None


def make_token(
    user_id: str,
    email: str | None = None,
    expires_in: int = 3600,
    secret: str | None = None,
    audience: str = "authenticated",
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "email": email,
        "role": "authenticated",
        "aud": audience,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret or settings.supabase_jwt_secret, algorithm="HS256")


def make_session(user_id: str, email: str) -> AuthSession:
    return AuthSession(
        access_token=make_token(user_id, email),
        refresh_token=f"refresh-{user_id}",
        expires_in=3600,
        user=Identity(id=user_id, email=email),
    )


def auth_headers(user_id: str, email: str | None = None) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id, email)}"}


@pytest.fixture
def store() -> InMemoryStore:
    store = InMemoryStore()
    store.seed()
    return store


@pytest.fixture
def user_repository(store: InMemoryStore) -> FakeUserRepository:
    return FakeUserRepository(store)


@pytest.fixture
def organization_repository(store: InMemoryStore) -> FakeOrganizationRepository:
    return FakeOrganizationRepository(store)


@pytest.fixture
def message_repository(store: InMemoryStore) -> FakeMessageRepository:
    return FakeMessageRepository(store)


@pytest.fixture
def fake_auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def client(
    user_repository: FakeUserRepository,
    organization_repository: FakeOrganizationRepository,
    message_repository: FakeMessageRepository,
    fake_auth_client: FakeAuthClient,
):
    app.dependency_overrides[get_user_repository] = lambda: user_repository
    app.dependency_overrides[get_organization_repository] = lambda: organization_repository
    app.dependency_overrides[get_message_repository] = lambda: message_repository
    app.dependency_overrides[get_auth_client] = lambda: fake_auth_client

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
