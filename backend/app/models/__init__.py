"""
Pydantic models for replica set configuration documents.
"""
from app.models.replica_set import (
    MemberSpec,
    ReplicaSetSpec,
    default_replica_set,
)

__all__ = [
    "MemberSpec",
    "ReplicaSetSpec",
    "default_replica_set",
]
