"""Create every MenuHub table in the configured database"""
import asyncio

from menuhub.database import create_tables, database_url
from menuhub.utils.logger import get_logger

logger = get_logger("menuhub.init_db")


async def init():
    await create_tables()
    logger.info(f"Tables created in {database_url}")


if __name__ == "__main__":
    asyncio.run(init())
