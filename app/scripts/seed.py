"""
Seed the database by hand: shared default categories and, optionally, an admin.

Usage:
    python -m app.scripts.seed
    python -m app.scripts.seed --admin-email admin@example.com --admin-password secret123
"""
import argparse
import asyncio
import logging

from app.config import settings
from app.database import AsyncSessionLocal, create_tables
from app.logging_config import setup_logging
from app.services.seed import ensure_admin, seed_default_categories

logger = logging.getLogger(__name__)


async def run(admin_email: str | None, admin_password: str | None, admin_name: str):
    await create_tables()
    async with AsyncSessionLocal() as db:
        created = await seed_default_categories(db)
        logger.info("Default categories created: %d", created)
        if admin_email and admin_password:
            admin = await ensure_admin(db, admin_email, admin_password, admin_name)
            logger.info("Admin ready: %s (ID: %s)", admin.email, admin.user_id)


def main():
    parser = argparse.ArgumentParser(description="Seed default categories and an admin user")
    parser.add_argument("--admin-email", default=settings.ADMIN_EMAIL)
    parser.add_argument("--admin-password", default=settings.ADMIN_PASSWORD)
    parser.add_argument("--admin-name", default=settings.ADMIN_NAME)
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL)
    asyncio.run(run(args.admin_email, args.admin_password, args.admin_name))


if __name__ == "__main__":
    main()
