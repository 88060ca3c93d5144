import logging

import asyncpg

from orgchat.core.exceptions import ConflictError, DatastoreError
from orgchat.database.query_builder import bind_named
from orgchat.dtos.user_dtos import CreateUserDTO
from orgchat.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:

    _SELECT_FIELDS = 'id, email, role, "organizationId"'

    def __init__(self, conn: asyncpg.Connection):
        self._conn = conn

    async def find_by_id(self, user_id: str) -> User | None:
        query = f"""
            SELECT {self._SELECT_FIELDS}
            FROM "User"
            WHERE id = :user_id
        """
        query, values = bind_named(query, {"user_id": user_id})
        row = await self._conn.fetchrow(query, *values)
        return self._map_to_model(row)

    async def create(self, dto: CreateUserDTO) -> User | None:
        query = f"""
            INSERT INTO "User" (id, email, role, "organizationId")
            VALUES (:id, :email, :role, :organization_id)
            RETURNING {self._SELECT_FIELDS}
        """
        params = {
            "id": dto.id,
            "email": dto.email,
            "role": dto.role,
            "organization_id": dto.organization_id,
        }
        query, values = bind_named(query, params)
        try:
            row = await self._conn.fetchrow(query, *values)
        except asyncpg.UniqueViolationError as e:
            logger.debug("Profile %s already exists: %s", dto.id, e)
            raise ConflictError(str(e)) from e
        except asyncpg.PostgresError as e:
            raise DatastoreError(str(e)) from e
        return self._map_to_model(row)

    async def upsert(self, dto: CreateUserDTO) -> bool:
        query = """
            INSERT INTO "User" (id, email, role, "organizationId")
            VALUES (:id, :email, :role, :organization_id)
            ON CONFLICT (id) DO NOTHING
        """
        params = {
            "id": dto.id,
            "email": dto.email,
            "role": dto.role,
            "organization_id": dto.organization_id,
        }
        query, values = bind_named(query, params)
        result = await self._conn.execute(query, *values)
        return result == "INSERT 0 1"

    def _map_to_model(self, row: asyncpg.Record | None) -> User | None:
        if row is None:
            return None
        return User(
            id=row["id"],
            email=row["email"],
            role=row["role"],
            organization_id=row["organizationId"],
        )
