import asyncio
import logging

from orgchat.constants.enums import UserRole
from orgchat.constants.seed_data import SEED_ORGANIZATIONS
from orgchat.core.logging import setup_logging
from orgchat.core.settings import settings
from orgchat.database import db_connection
from orgchat.dtos.organization_dtos import CreateOrganizationDTO
from orgchat.dtos.user_dtos import CreateUserDTO
from orgchat.repositories.organization_repository import OrganizationRepository
from orgchat.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


async def seed(
    organization_repository: OrganizationRepository,
    user_repository: UserRepository,
) -> None:
    """Create the well-known organizations and their bot users if missing."""
    for org in SEED_ORGANIZATIONS:
        created = await organization_repository.upsert(
            CreateOrganizationDTO(id=org.id, name=org.name)
        )
        logger.info("Organization %s %s", org.id, "created" if created else "exists")

        created = await user_repository.upsert(
            CreateUserDTO(
                id=org.bot_user_id,
                email=org.bot_email,
                role=UserRole.STUDENT.value,
                organization_id=org.id,
            )
        )
        logger.info("Bot user %s %s", org.bot_user_id, "created" if created else "exists")


async def main() -> None:
    setup_logging(settings.log_level)
    await db_connection.connect()
    try:
        async with db_connection.get_connection() as conn:
            async with conn.transaction():
                await seed(OrganizationRepository(conn), UserRepository(conn))
    finally:
        await db_connection.close()


if __name__ == "__main__":
    asyncio.run(main())
