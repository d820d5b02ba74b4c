"""
Recreate the Deep database schema from the SQLAlchemy entity modules.

Usage:
    DATABASE_URL=postgresql+asyncpg://... python -m tools.init_db

This drops the public schema, so it is meant for local and test databases only.
"""

import asyncio
import importlib
import pkgutil
import backend.entity
from sqlalchemy import text
from backend.common.base import Base
from backend.common.database import Database
from backend.common.logger import get_logger

logger = get_logger("init_db")


def load_all_entities():
    """
    Import every module under backend.entity.

    Importing these modules registers all SQLAlchemy model classes and their
    Table objects into Base.metadata before create_all() runs.
    """
    package = backend.entity
    prefix = package.__name__ + "."

    for _, name, _ in pkgutil.iter_modules(package.__path__, prefix):
        logger.info("Auto importing model: %s", name)
        importlib.import_module(name)


async def reset_database():
    """
    Reset the PostgreSQL database by:
    1. Importing all SQLAlchemy entity modules.
    2. Dropping and recreating the public schema.
    3. Recreating all tables defined in Base.metadata.
    """
    load_all_entities()

    db = Database(echo=False)
    engine = db.get_engine()

    async with engine.begin() as conn:
        logger.info("Dropping and recreating public schema...")
        await conn.execute(text("DROP SCHEMA public CASCADE;"))
        await conn.execute(text("CREATE SCHEMA public;"))

        logger.info(
            "Creating tables: %s", ", ".join(sorted(Base.metadata.tables.keys()))
        )
        await conn.run_sync(Base.metadata.create_all)

    await db.close()
    logger.info("Database reset complete.")


def main():
    logger.info("Resetting database tables...")
    asyncio.run(reset_database())


if __name__ == "__main__":
    main()
