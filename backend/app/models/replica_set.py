"""
Replica set document models.

Mirrors the document accepted by the ``replSetInitiate`` admin command.
"""
import re
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictInt, field_validator, model_validator

HOST_PATTERN = re.compile(r"^(?P<name>[A-Za-z0-9](?:[A-Za-z0-9.\-_]*[A-Za-z0-9])?):(?P<port>\d{1,5})$")


class MemberSpec(BaseModel):
    """A single replica set member."""
    id: StrictInt = Field(..., alias="_id", ge=0, description="Member id, unique within the set")
    host: str = Field(..., description="Member address as host:port")
    priority: float = Field(default=1, ge=0, allow_inf_nan=False, description="Election priority")

    class Config:
        populate_by_name = True

    @field_validator("host")
    @classmethod
    def validate_host(cls, value: str) -> str:
        match = HOST_PATTERN.match(value)
        if match is None:
            raise ValueError(f"host must look like <name>:<port>, got {value!r}")
        port = int(match.group("port"))
        if not 1 <= port <= 65535:
            raise ValueError(f"port out of range in {value!r}")
        return value


class ReplicaSetSpec(BaseModel):
    """
    Replica set configuration submitted once at deployment time.

    Member ids and hosts must be unique. A tie on the highest priority is
    allowed but makes the preferred primary ambiguous, see ``preferred_primary``.
    """
    id: str = Field(..., alias="_id", min_length=1, description="Replica set name")
    members: list[MemberSpec] = Field(..., min_length=1, description="Members in declared order")

    class Config:
        populate_by_name = True

    @model_validator(mode="after")
    def check_unique_members(self) -> "ReplicaSetSpec":
        ids = self.member_ids()
        if len(set(ids)) != len(ids):
            raise ValueError(f"duplicate member _id in {ids}")
        hosts = [m.host for m in self.members]
        if len(set(hosts)) != len(hosts):
            raise ValueError(f"duplicate member host in {hosts}")
        return self

    def member_ids(self) -> list[int]:
        return [m.id for m in self.members]

    def preferred_primary(self) -> Optional[MemberSpec]:
        """Member with the strictly highest priority, or None on a tie."""
        top = max(m.priority for m in self.members)
        leaders = [m for m in self.members if m.priority == top]
        return leaders[0] if len(leaders) == 1 else None

    def to_command_document(self) -> dict[str, Any]:
        """Document passed as the replSetInitiate argument."""
        return {
            "_id": self.id,
            "members": [
                {"_id": m.id, "host": m.host, "priority": _wire_number(m.priority)}
                for m in self.members
            ],
        }


def _wire_number(value: float) -> int | float:
    # Whole priorities go out as ints, matching the shell literal
    return int(value) if float(value).is_integer() else value


# Default three-node layout; mongo1 is the preferred primary
DEFAULT_REPLICA_SET_NAME = "myReplicaSet"

DEFAULT_MEMBERS: list[dict[str, Any]] = [
    {"_id": 0, "host": "mongo1:27017", "priority": 2},
    {"_id": 1, "host": "mongo2:27017", "priority": 1},
    {"_id": 2, "host": "mongo3:27017", "priority": 1},
]


def default_replica_set() -> ReplicaSetSpec:
    """Build the default replica set spec."""
    return ReplicaSetSpec(_id=DEFAULT_REPLICA_SET_NAME, members=DEFAULT_MEMBERS)
