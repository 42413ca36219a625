"""
Service layer for replica set administration.
"""
from app.services.replica_set_service import ReplicaSetService

__all__ = [
    "ReplicaSetService",
]
