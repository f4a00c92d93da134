"""
create_tables.py
----------------
One-shot script to create all database tables, optionally seeding a
platform operator (a user without a home tenant) for the root domain.
Use this for quick setup. For production migrations, use Alembic instead.

Usage:
    python create_tables.py
    python create_tables.py --operator ops@example.com --password 'change-me-now'
"""

import argparse
import asyncio
from typing import Optional

from bizdesk.core.config import settings
from bizdesk.core.logging import configure_logging, get_logger
from bizdesk.core.security import hash_password
from bizdesk.db.session import build_engine, build_sessionmaker
from bizdesk.models import Base, User, UserRole  # Imports all models so metadata is populated
from bizdesk.repositories.users import find_user_by_email

logger = get_logger(__name__)


async def create_all_tables(operator_email: Optional[str] = None, password: Optional[str] = None) -> None:
    engine = build_engine(settings.DATABASE_URL, echo=True)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created")

    if operator_email and password:
        async with build_sessionmaker(engine)() as db:
            if await find_user_by_email(db, operator_email) is None:
                db.add(
                    User(
                        email=operator_email.lower(),
                        hashed_password=hash_password(password),
                        name="Platform operator",
                        role=UserRole.admin.value,
                        company_id=None,
                    )
                )
                await db.commit()
                logger.info("Platform operator created", email=operator_email)
    await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create all tables and seed an operator")
    parser.add_argument("--operator", help="E-mail of a platform operator to seed")
    parser.add_argument("--password", help="Password for the seeded operator")
    args = parser.parse_args()

    configure_logging()
    asyncio.run(create_all_tables(args.operator, args.password))
