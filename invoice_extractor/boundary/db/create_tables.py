"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.
Idempotent: existing tables are left unchanged.

Dependencies: sqlalchemy, invoice_extractor.configs
System role: Database schema initialization

Usage:
    python -m invoice_extractor.boundary.db.create_tables
"""

import asyncio
import logging

from invoice_extractor.boundary.db.connection import create_all_tables, get_async_engine
from invoice_extractor.observability.logger import configure_logging

logger = logging.getLogger(__name__)


async def main() -> None:
    await create_all_tables()
    await get_async_engine().dispose()
    logger.info("Database tables created")


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
