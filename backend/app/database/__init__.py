"""
Database module - MongoDB connection for the bootstrap run.
"""
from app.database.connections import (
    get_mongo_client,
    close_connections,
    ping,
)

__all__ = [
    "get_mongo_client",
    "close_connections",
    "ping",
]
