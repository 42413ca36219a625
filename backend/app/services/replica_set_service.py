"""
Replica set initialization service.

Provides:
- One-shot submission of a ReplicaSetSpec via replSetInitiate
- Replica set status lookup
- Waiting for the freshly initiated set to elect a primary
"""
import asyncio
import logging
import time
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import OperationFailure

from app.models.replica_set import ReplicaSetSpec

logger = logging.getLogger(__name__)

# Server error codes
ALREADY_INITIALIZED = 23
NOT_YET_INITIALIZED = 94

PRIMARY_STATE = 1


class ReplicaSetService:
    """Admin commands for bootstrapping a replica set."""

    def __init__(self, client: AsyncIOMotorClient):
        """Initialize with a directly connected client."""
        self.admin = client.admin

    async def initiate(self, spec: ReplicaSetSpec) -> dict[str, Any]:
        """
        Submit the replica set configuration exactly once.

        Engine errors are logged and re-raised; nothing is retried.

        Args:
            spec: Validated replica set configuration

        Returns:
            The engine's command reply
        """
        document = spec.to_command_document()
        logger.info(
            f"Initiating replica set '{spec.id}' with {len(spec.members)} members"
        )
        try:
            reply = await self.admin.command("replSetInitiate", document)
        except OperationFailure as e:
            if e.code == ALREADY_INITIALIZED:
                logger.error(f"Replica set already initialized: {e}")
            else:
                logger.error(f"replSetInitiate failed (code {e.code}): {e}")
            raise
        logger.info(f"replSetInitiate accepted: ok={reply.get('ok')}")
        return reply

    async def get_status(self) -> dict[str, Any]:
        """Get the replSetGetStatus reply."""
        return await self.admin.command("replSetGetStatus")

    async def wait_for_primary(
        self,
        timeout: float = 60.0,
        poll_interval: float = 1.0,
    ) -> str:
        """
        Poll replica set status until a member reports PRIMARY.

        Status errors while the configuration propagates are treated as
        "not ready yet". replSetInitiate is never re-sent.

        Returns:
            Host name of the elected primary

        Raises:
            TimeoutError: if no primary is elected before the deadline
        """
        deadline = time.monotonic() + timeout
        while True:
            try:
                status = await self.get_status()
            except OperationFailure as e:
                if e.code == NOT_YET_INITIALIZED:
                    logger.debug("Replica set configuration not applied yet")
                else:
                    logger.debug(f"Replica set status unavailable (code {e.code}): {e}")
            else:
                primary = find_primary(status)
                if primary:
                    logger.info(f"Primary elected: {primary}")
                    return primary

            if time.monotonic() >= deadline:
                raise TimeoutError(f"No primary elected within {timeout} seconds")
            await asyncio.sleep(poll_interval)


def find_primary(status: dict[str, Any]) -> Optional[str]:
    """Name of the PRIMARY member in a replSetGetStatus reply, if any."""
    for member in status.get("members", []):
        if member.get("state") == PRIMARY_STATE or member.get("stateStr") == "PRIMARY":
            return member.get("name")
    return None
