from __future__ import annotations

from alembic import context
from sqlalchemy import engine_from_config, pool

from recruitportal.infrastructure.stores.models import Base
from recruitportal.infrastructure.stores.sqlalchemy_db import get_db_url

config = context.config
config.set_main_option("sqlalchemy.url", get_db_url())
target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(url=config.get_main_option("sqlalchemy.url"), target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
