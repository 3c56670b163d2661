"""Script to create the library database and its tables."""

import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from library_api.infrastructure.database.session import (  # noqa: E402
    create_tables,
    dispose_engine,
    ensure_database,
)
from library_api.infrastructure.logging import get_logger  # noqa: E402

logger = get_logger(__name__)


async def main() -> None:
    """Create the database if missing, then its tables."""
    logger.info("Creating database and tables...")

    try:
        await ensure_database()
        await create_tables()
        logger.info("✅ Database tables created successfully!")
    except Exception as e:
        logger.error(f"❌ Error creating database tables: {str(e)}", exc_info=True)
        sys.exit(1)
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
