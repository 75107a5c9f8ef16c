from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from linguastore.core.config import get_settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def make_alembic_config(database_url: str | None = None) -> Config:
    """Alembic config pointing at the bundled scripts and the given (or configured) database."""
    alembic_ini = PROJECT_ROOT / "alembic.ini"
    if not alembic_ini.exists():
        raise RuntimeError(f"Alembic configuration not found at {alembic_ini}")

    url = database_url or get_settings().database_url
    if not url:
        raise RuntimeError("DATABASE_URL must be configured to run migrations.")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    # ConfigParser interpolation treats '%' specially (URL-encoded passwords).
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


async def migrate_database(revision: str = "head", *, database_url: str | None = None) -> None:
    """Upgrade the schema to ``revision`` without blocking the event loop."""
    config = make_alembic_config(database_url)
    logger.info("Applying migrations up to %s", revision)
    loop = asyncio.get_running_loop()
    await loop.run_in_executor(None, command.upgrade, config, revision)
