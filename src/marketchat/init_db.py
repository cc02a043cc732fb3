"""Create the messaging tables for local development."""
import asyncio

from marketchat.db.session import create_tables, engine


async def init_db() -> None:
    """Initialize the database by creating all tables."""
    await create_tables()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init_db())
    print("Database initialized.")
