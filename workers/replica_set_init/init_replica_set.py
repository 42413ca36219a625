#!/usr/bin/env python3
"""
Replica Set Bootstrap Worker

Submits the replica set configuration to a fresh MongoDB instance once,
during container startup, then waits for the set to elect a primary.
No retries: any failure is logged and the process exits with status 1.

Usage:
    python init_replica_set.py

Environment Variables:
    MONGO_URI: Instance that receives replSetInitiate (default: mongodb://mongo1:27017)
    REPLICA_SET_NAME: Replica set _id (default: myReplicaSet)
    REPLICA_SET_MEMBERS: JSON list of {_id, host, priority} documents
    WAIT_FOR_PRIMARY: Wait for an elected primary after initiating (default: true)
    PRIMARY_WAIT_TIMEOUT_SECONDS: Upper bound on that wait (default: 60)
    LOG_LEVEL: Logging level (default: INFO)
"""
import asyncio
import logging
import sys
from typing import Optional

from pydantic import ValidationError
from pydantic_settings import SettingsError
from pymongo.errors import PyMongoError

from app.config import Settings, build_replica_set_spec, get_settings
from app.database.connections import close_connections, get_mongo_client, ping
from app.models.replica_set import ReplicaSetSpec
from app.services.replica_set_service import ReplicaSetService


# ==================== Logging Setup ====================

logger = logging.getLogger("replica_set_init")


def configure_logging(level_name: str = "INFO") -> None:
    """Configure root logging; unknown level names fall back to INFO."""
    level = logging.getLevelName(level_name.upper())
    known = isinstance(level, int)
    logging.basicConfig(
        level=level if known else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    if not known:
        logger.warning(f"Unknown LOG_LEVEL {level_name!r}, using INFO")


def describe_spec(spec: ReplicaSetSpec) -> None:
    """Log the layout about to be submitted."""
    logger.info(f"Replica set: {spec.id}")
    for member in spec.members:
        logger.info(f"  member {member.id}: {member.host} (priority {member.priority:g})")

    preferred = spec.preferred_primary()
    if preferred is None:
        logger.warning("Highest priority is shared; election outcome is not deterministic")
    else:
        logger.info(f"Preferred primary: {preferred.host}")


async def bootstrap(settings: Settings) -> Optional[str]:
    """
    Validate, submit once, and optionally wait for a primary.

    Returns the elected primary's host, or None when not waiting.
    """
    spec = build_replica_set_spec(settings)
    describe_spec(spec)

    client = await get_mongo_client(settings)
    await ping(client)
    logger.info("Connected to MongoDB")

    service = ReplicaSetService(client)
    await service.initiate(spec)

    if not settings.wait_for_primary:
        return None
    return await service.wait_for_primary(
        timeout=settings.primary_wait_timeout_seconds,
        poll_interval=settings.status_poll_interval_seconds,
    )


# ==================== Main Entry Point ====================

async def main(settings: Settings) -> int:
    """Main entry point. Returns the process exit status."""
    try:
        await bootstrap(settings)
    except ValidationError as e:
        logger.error(f"Invalid replica set configuration: {e}")
        return 1
    except PyMongoError as e:
        logger.error(f"Replica set initiation failed: {e}")
        return 1
    except TimeoutError as e:
        logger.error(str(e))
        return 1
    finally:
        await close_connections()

    logger.info("Replica set bootstrap complete")
    return 0


def run() -> int:
    """Load settings from the environment, then bootstrap."""
    try:
        config = get_settings()
    except (SettingsError, ValidationError) as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        return 1

    configure_logging(config.log_level)

    logger.info("=" * 60)
    logger.info("Replica Set Bootstrap Worker")
    logger.info(f"Target: {config.mongo_uri}")
    logger.info("=" * 60)

    return asyncio.run(main(config))


if __name__ == "__main__":
    sys.exit(run())
