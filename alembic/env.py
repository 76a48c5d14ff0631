"""Alembic environment bound to the application's engine and metadata."""
from __future__ import annotations

from alembic import context

import iconbadges.core.models  # noqa: F401
from iconbadges.core.database import Base, get_engine

target_metadata = Base.metadata


def run_migrations_online() -> None:
    with get_engine().connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)
        with context.begin_transaction():
            context.run_migrations()


run_migrations_online()
