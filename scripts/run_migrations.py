#!/usr/bin/env python3
"""Apply the vote ledger schema with Logfire error tracking.

Checks the voting settings before touching the database, so a deploy with a
bad VOTING__TIMEZONE fails here instead of after the schema has moved.
"""

import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config
from sqlalchemy.engine import make_url

from pulsar.config import Settings
from pulsar.domain.value.window import resolve_timezone
from pulsar.util.observability import configure_logfire

ROOT = Path(__file__).resolve().parent.parent


def migration_target(database_url: str) -> dict[str, str | None]:
    """Describe the database being migrated, without credentials."""
    url = make_url(database_url)
    return {
        "driver": url.drivername,
        "host": url.host,
        "database": url.database,
    }


def alembic_config() -> Config:
    """Alembic config that works from any working directory."""
    alembic_cfg = Config(str(ROOT / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(ROOT / "migrations"))
    return alembic_cfg


def main() -> int:
    """Run migrations and log any errors to Logfire."""
    settings = Settings()

    configure_logfire(settings)

    try:
        zone = resolve_timezone(settings.voting.timezone)
        logfire.info(
            "Applying Pulsar vote schema migrations",
            environment=settings.environment,
            voting_timezone=str(zone),
            daily_vote_limit=settings.voting.daily_vote_limit,
            **migration_target(settings.database_url),
        )

        command.upgrade(alembic_config(), "head")

        logfire.info("Pulsar vote schema is at head")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Re-raise so the container fails and doesn't start with broken schema
        raise


if __name__ == "__main__":
    sys.exit(main())
