"""Migration environment for the campus events schema.

Covers ``profiles``, ``societies``, ``society_members``, ``events``,
``event_rsvps``, ``event_checkins`` and ``event_reminders``. The URL always
comes from ``DATABASE_URL`` so migrations and the app target the same
database. SQLite cannot ALTER most constraints in place, so migrations run
in batch mode there.
"""
import os
import sys
from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from campus_events import models  # noqa: E402,F401  registers every table on Base.metadata
from campus_events.config import settings  # noqa: E402
from campus_events.database import Base  # noqa: E402

config = context.config
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _configure_kwargs(url: str) -> dict:
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of connecting."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_kwargs(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, **_configure_kwargs(str(connectable.url)))
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
