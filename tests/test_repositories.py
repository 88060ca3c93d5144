from datetime import datetime, timezone

import asyncpg
import pytest

from orgchat.core.exceptions import ConflictError, DatastoreError
from orgchat.dtos.message_dtos import CreateMessageDTO
from orgchat.dtos.user_dtos import CreateUserDTO
from orgchat.repositories.message_repository import MessageRepository
from orgchat.repositories.organization_repository import OrganizationRepository
from orgchat.repositories.user_repository import UserRepository

CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


class RecordingConnection:
    """Stands in for an asyncpg connection; dict rows support ``row["col"]``."""

    def __init__(self, rows=None, error: Exception | None = None, status="INSERT 0 1"):
        self.rows = rows or []
        self.error = error
        self.status = status
        self.queries: list[tuple[str, tuple]] = []

    async def fetch(self, query, *args):
        self.queries.append((query, args))
        if self.error:
            raise self.error
        return self.rows

    async def fetchrow(self, query, *args):
        self.queries.append((query, args))
        if self.error:
            raise self.error
        return self.rows[0] if self.rows else None

    async def execute(self, query, *args):
        self.queries.append((query, args))
        return self.status


@pytest.mark.asyncio
async def test_user_create_maps_row():
    conn = RecordingConnection(
        rows=[{"id": "u-1", "email": "a@example.com", "role": "STUDENT", "organizationId": "o-1"}]
    )

    user = await UserRepository(conn).create(
        CreateUserDTO(id="u-1", email="a@example.com", organization_id="o-1")
    )

    assert user.organization_id == "o-1"
    query, args = conn.queries[0]
    assert 'INSERT INTO "User"' in query
    assert args == ("u-1", "a@example.com", "STUDENT", "o-1")


@pytest.mark.asyncio
async def test_user_create_unique_violation_is_conflict():
    conn = RecordingConnection(error=asyncpg.UniqueViolationError("duplicate key"))

    with pytest.raises(ConflictError):
        await UserRepository(conn).create(
            CreateUserDTO(id="u-1", email="a@example.com", organization_id="o-1")
        )


@pytest.mark.asyncio
async def test_user_create_other_failure_is_datastore_error():
    conn = RecordingConnection(error=asyncpg.ForeignKeyViolationError("no such org"))

    with pytest.raises(DatastoreError) as exc_info:
        await UserRepository(conn).create(
            CreateUserDTO(id="u-1", email="a@example.com", organization_id="missing")
        )

    assert not isinstance(exc_info.value, ConflictError)


@pytest.mark.asyncio
async def test_user_find_by_id_missing_returns_none():
    assert await UserRepository(RecordingConnection()).find_by_id("nobody") is None


@pytest.mark.asyncio
async def test_organization_list_is_ordered_by_id():
    conn = RecordingConnection(rows=[{"id": "a", "name": "A"}, {"id": "b", "name": "B"}])

    organizations = await OrganizationRepository(conn).list_all()

    assert [org.id for org in organizations] == ["a", "b"]
    assert "ORDER BY id ASC" in conn.queries[0][0]


@pytest.mark.asyncio
async def test_message_listing_is_scoped_and_ordered():
    conn = RecordingConnection(
        rows=[
            {
                "id": "m-1",
                "content": "hello",
                "userId": "u-1",
                "organizationId": "o-1",
                "createdAt": CREATED_AT,
                "author_email": "a@example.com",
            }
        ]
    )

    messages = await MessageRepository(conn).list_by_organization("o-1")

    assert messages[0].author_email == "a@example.com"
    assert messages[0].created_at == CREATED_AT
    query, args = conn.queries[0]
    assert 'WHERE m."organizationId" = $1' in query
    assert 'ORDER BY m."createdAt" ASC' in query
    assert args == ("o-1",)


@pytest.mark.asyncio
async def test_message_create_failure_is_datastore_error():
    conn = RecordingConnection(error=asyncpg.CheckViolationError("empty content"))

    with pytest.raises(DatastoreError):
        await MessageRepository(conn).create(
            CreateMessageDTO(content="x", user_id="u-1", organization_id="o-1")
        )


@pytest.mark.asyncio
async def test_seed_upserts_organizations_before_their_bots():
    from orgchat.constants.seed_data import SEED_ORGANIZATIONS
    from orgchat.scripts.seed import seed

    conn = RecordingConnection(status="INSERT 0 0")

    await seed(OrganizationRepository(conn), UserRepository(conn))

    statements = [query for query, _ in conn.queries]
    assert len(statements) == 2 * len(SEED_ORGANIZATIONS)
    assert all("ON CONFLICT (id) DO NOTHING" in query for query in statements)
    assert 'INSERT INTO "Organization"' in statements[0]
    assert 'INSERT INTO "User"' in statements[1]
    assert conn.queries[1][1][0] == SEED_ORGANIZATIONS[0].bot_user_id
