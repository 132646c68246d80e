"""
Versioned schema migrations.

Run out-of-band before starting the services::

    python -m database.migrations upgrade
    python -m database.migrations current

Each step runs in its own transaction and is recorded in ``schema_version``;
re-running ``upgrade`` applies only what is missing.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional

from sqlalchemy import Connection, inspect, select
from sqlalchemy.ext.asyncio import AsyncEngine

from database.models import Base, Room, SchemaVersion, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    upgrade: Callable[[Connection], None]


def _create_identity_and_room_tables(conn: Connection) -> None:
    Base.metadata.create_all(conn, tables=[User.__table__, Room.__table__])


MIGRATIONS: List[Migration] = [
    Migration(1, "create users and rooms", _create_identity_and_room_tables),
]


def _ensure_version_table(conn: Connection) -> None:
    Base.metadata.create_all(conn, tables=[SchemaVersion.__table__])


def _current_version(conn: Connection) -> int:
    if not inspect(conn).has_table(SchemaVersion.__tablename__):
        return 0
    versions = conn.execute(select(SchemaVersion.version)).scalars().all()
    return max(versions, default=0)


async def current_version(engine: AsyncEngine) -> int:
    async with engine.connect() as conn:
        return await conn.run_sync(_current_version)


async def pending(engine: AsyncEngine) -> List[Migration]:
    version = await current_version(engine)
    return [m for m in MIGRATIONS if m.version > version]


async def upgrade(engine: AsyncEngine, target: Optional[int] = None) -> int:
    """
    Apply pending migrations up to *target* (all of them by default).

    Returns the schema version after the run.
    """
    async with engine.begin() as conn:
        await conn.run_sync(_ensure_version_table)

    version = await current_version(engine)
    for migration in MIGRATIONS:
        if migration.version <= version:
            continue
        if target is not None and migration.version > target:
            break
        async with engine.begin() as conn:
            await conn.run_sync(migration.upgrade)
            await conn.execute(
                SchemaVersion.__table__.insert().values(
                    version=migration.version,
                    description=migration.description,
                )
            )
        logger.info("Applied migration %d: %s", migration.version, migration.description)
        version = migration.version

    return version


async def _main(argv: List[str]) -> int:
    from config.settings import config
    from database.session import build_engine

    parser = argparse.ArgumentParser(prog="python -m database.migrations")
    parser.add_argument("command", choices=["upgrade", "current"], nargs="?", default="upgrade")
    parser.add_argument("--target", type=int, default=None)
    args = parser.parse_args(argv)

    engine = build_engine(config)
    try:
        if args.command == "current":
            print(await current_version(engine))
        else:
            version = await upgrade(engine, target=args.target)
            logger.info("Schema is at version %d", version)
    finally:
        await engine.dispose()
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s  %(levelname)-8s  %(name)s — %(message)s")
    sys.exit(asyncio.run(_main(sys.argv[1:])))
