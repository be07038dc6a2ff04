"""
Database initialization script

Run this script to create all database tables and the first administrator.
Usage: python init_db.py [--drop]
"""
import asyncio
import logging
from sqlalchemy import select
from casework.core.config import settings
from casework.core.database import SessionLocal, create_tables, drop_tables
from casework.models import UserProfile, UserRole

logger = logging.getLogger("init_db")


async def init_database():
    """Create all database tables and seed the initial admin profile"""
    logger.info("Creating database tables...")
    await create_tables()

    async with SessionLocal() as session:
        result = await session.execute(
            select(UserProfile).where(UserProfile.email == settings.INITIAL_ADMIN_EMAIL.lower())
        )
        admin = result.scalar_one_or_none()

        if admin is None:
            admin = UserProfile(
                email=settings.INITIAL_ADMIN_EMAIL.lower(),
                full_name=settings.INITIAL_ADMIN_NAME,
                role=UserRole.ADMIN,
            )
            session.add(admin)
            await session.commit()
            logger.info("Created admin %s with id %s (send it as X-User-Id)", admin.email, admin.id)
        else:
            logger.info("Admin %s already exists with id %s", admin.email, admin.id)

    logger.info("Database tables created successfully")


async def drop_database():
    """Drop all database tables"""
    logger.info("Dropping all database tables...")
    await drop_tables()
    logger.info("Database tables dropped successfully")


if __name__ == "__main__":
    import sys

    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(message)s")

    if len(sys.argv) > 1 and sys.argv[1] == "--drop":
        asyncio.run(drop_database())
    else:
        asyncio.run(init_database())
