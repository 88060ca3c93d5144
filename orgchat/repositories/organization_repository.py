import asyncpg

from orgchat.database.query_builder import bind_named
from orgchat.dtos.organization_dtos import CreateOrganizationDTO
from orgchat.models.organization import Organization


class OrganizationRepository:

    _SELECT_FIELDS = "id, name"

    def __init__(self, conn: asyncpg.Connection):
        self._conn = conn

    async def list_all(self) -> list[Organization]:
        query = f"""
            SELECT {self._SELECT_FIELDS}
            FROM "Organization"
            ORDER BY id ASC
        """
        rows = await self._conn.fetch(query)
        return [self._map_to_model(row) for row in rows]

    async def find_by_id(self, org_id: str) -> Organization | None:
        query = f"""
            SELECT {self._SELECT_FIELDS}
            FROM "Organization"
            WHERE id = :org_id
        """
        query, values = bind_named(query, {"org_id": org_id})
        row = await self._conn.fetchrow(query, *values)
        return self._map_to_model(row)

    async def upsert(self, dto: CreateOrganizationDTO) -> bool:
        query = """
            INSERT INTO "Organization" (id, name)
            VALUES (:id, :name)
            ON CONFLICT (id) DO NOTHING
        """
        query, values = bind_named(query, {"id": dto.id, "name": dto.name})
        result = await self._conn.execute(query, *values)
        return result == "INSERT 0 1"

    def _map_to_model(self, row: asyncpg.Record | None) -> Organization | None:
        if row is None:
            return None
        return Organization(id=row["id"], name=row["name"])
