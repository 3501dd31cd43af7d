import argparse
import asyncio
import logging

from messagely.config import load_config
from messagely.core.db_manager import create_db_manager
from messagely.logging_config import setup_logging

logger = logging.getLogger(__name__)

async def init_db(reset: bool = False):
    config = load_config(".env")
    setup_logging(config.logging.level)

    db_manager = create_db_manager(config)
    try:
        await db_manager.initialize()
        if reset:
            await db_manager.drop_tables()
        await db_manager.create_tables()
        backend = "postgresql" if config.db.is_postgres else "sqlite"
        logger.info("Database ready", extra={"backend": backend})
    finally:
        await db_manager.close()

def main():
    parser = argparse.ArgumentParser(description="Create the messagely tables")
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()

    asyncio.run(init_db(reset=args.reset))

if __name__ == "__main__":
    main()
