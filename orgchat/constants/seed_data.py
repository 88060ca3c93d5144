from dataclasses import dataclass


@dataclass(frozen=True)
class SeedOrganization:
    id: str
    name: str
    bot_user_id: str
    bot_email: str


ORG_A_ID = "org-a-uuid-0000-0000-000000000001"
ORG_B_ID = "org-b-uuid-0000-0000-000000000002"

BOT_ORG_A_ID = "ai-bot-org-a-uuid"
BOT_ORG_B_ID = "ai-bot-org-b-uuid"

SEED_ORGANIZATIONS: tuple[SeedOrganization, ...] = (
    SeedOrganization(
        id=ORG_A_ID,
        name="Organization A",
        bot_user_id=BOT_ORG_A_ID,
        bot_email="ai-bot-org-a@system.local",
    ),
    SeedOrganization(
        id=ORG_B_ID,
        name="Organization B",
        bot_user_id=BOT_ORG_B_ID,
        bot_email="ai-bot-org-b@system.local",
    ),
)

BOT_USER_IDS: dict[str, str] = {
    org.id: org.bot_user_id for org in SEED_ORGANIZATIONS
}

BOT_REPLY_PREFIX = "AI response to: "
