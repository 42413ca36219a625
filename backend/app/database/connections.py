"""
MongoDB connection management for the bootstrap run.
"""
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient

from app.config import Settings, get_settings

# Global connection instance
_mongo_client: Optional[AsyncIOMotorClient] = None


async def get_mongo_client(settings: Optional[Settings] = None) -> AsyncIOMotorClient:
    """
    Get or create the MongoDB client.

    The target is not a replica set member yet, so topology discovery is
    bypassed with a direct connection.
    """
    global _mongo_client
    if _mongo_client is None:
        settings = settings or get_settings()
        _mongo_client = AsyncIOMotorClient(
            settings.mongo_uri,
            directConnection=True,
            serverSelectionTimeoutMS=settings.server_selection_timeout_ms,
        )
    return _mongo_client


async def close_connections():
    """Close the MongoDB connection."""
    global _mongo_client

    if _mongo_client is not None:
        _mongo_client.close()
        _mongo_client = None


async def ping(client: AsyncIOMotorClient) -> dict:
    """Confirm the instance answers admin commands."""
    return await client.admin.command("ping")
