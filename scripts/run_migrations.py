#!/usr/bin/env python3
"""Upgrade the database schema to the latest Alembic revision."""

import sys

import logfire
from alembic import command
from alembic.config import Config

from spark.config import Settings
from spark.util.logging import setup_logging
from spark.util.observability import configure_logfire


def main(revision: str = "head") -> int:
    """Run ``alembic upgrade`` against the configured database.

    A failure is logged and re-raised so the deploy stops before the API
    starts against a stale schema.
    """
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    database = settings.database.url.rsplit("/", 1)[-1]
    with logfire.span("migrations.upgrade", database=database, revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception:
            logfire.exception("Database migration failed", database=database)
            raise

    logfire.info("Database schema is up to date", database=database)
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:2]))
