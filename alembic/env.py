# alembic/env.py
"""
Migration runner for the leasing schema.

The target database comes from ``-x url=...`` when given, otherwise from the
same settings the application uses (``DATABASE_URL`` or the DB_* parts).
SQLite targets run in batch mode because SQLite cannot ALTER most columns.
"""
import os
import sys
from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import make_url
from alembic import context

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import build_database_url
from models import Base

alembic_config = context.config

if alembic_config.config_file_name is not None:
    # Keep the application's loggers alive when migrations run in-process
    fileConfig(alembic_config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _target_url() -> str:
    return context.get_x_argument(as_dictionary=True).get("url") or build_database_url()


def _configure(backend: str, **kwargs) -> None:
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        render_as_batch=backend == "sqlite",
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout instead of executing it."""
    url = _target_url()
    _configure(make_url(url).get_backend_name(), url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(_target_url(), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            _configure(connection.dialect.name, connection=connection)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
