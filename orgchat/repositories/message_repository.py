import asyncpg

from orgchat.core.exceptions import DatastoreError
from orgchat.database.query_builder import bind_named
from orgchat.dtos.message_dtos import CreateMessageDTO
from orgchat.models.message import Message, MessageWithAuthor


class MessageRepository:

    _SELECT_FIELDS = 'id, content, "userId", "organizationId", "createdAt"'

    def __init__(self, conn: asyncpg.Connection):
        self._conn = conn

    async def create(self, dto: CreateMessageDTO) -> Message:
        query = f"""
            INSERT INTO "Message" (id, content, "userId", "organizationId")
            VALUES (:id, :content, :user_id, :organization_id)
            RETURNING {self._SELECT_FIELDS}
        """
        params = {
            "id": dto.id,
            "content": dto.content,
            "user_id": dto.user_id,
            "organization_id": dto.organization_id,
        }
        query, values = bind_named(query, params)
        try:
            row = await self._conn.fetchrow(query, *values)
        except asyncpg.PostgresError as e:
            raise DatastoreError(str(e)) from e
        if row is None:
            raise DatastoreError(f"Insert of message {dto.id} returned no row")
        return self._map_to_model(row)

    async def list_by_organization(
        self, organization_id: str
    ) -> list[MessageWithAuthor]:
        query = """
            SELECT m.id, m.content, m."userId", m."organizationId", m."createdAt",
                   u.email AS author_email
            FROM "Message" m
            LEFT JOIN "User" u ON u.id = m."userId"
            WHERE m."organizationId" = :organization_id
            ORDER BY m."createdAt" ASC
        """
        query, values = bind_named(query, {"organization_id": organization_id})
        try:
            rows = await self._conn.fetch(query, *values)
        except asyncpg.PostgresError as e:
            raise DatastoreError(str(e)) from e
        return [
            MessageWithAuthor(
                **self._map_to_model(row).model_dump(),
                author_email=row["author_email"],
            )
            for row in rows
        ]

    def _map_to_model(self, row: asyncpg.Record) -> Message:
        return Message(
            id=row["id"],
            content=row["content"],
            user_id=row["userId"],
            organization_id=row["organizationId"],
            created_at=row["createdAt"],
        )
