import asyncio
from logging.config import fileConfig

from alembic import context

# Settings load .env and require DATABASE_URL
from app.core.config import settings
from app.core.database import Base, create_engine_from_settings, get_database_url
from app.models.vehicle import Vehicle  # noqa
from app.models.client import Client  # noqa
from app.models.rental import Rental  # noqa

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=get_database_url(settings),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online() -> None:
    # Same engine factory (URL and sslmode rules) as the application
    engine = create_engine_from_settings(settings)

    async with engine.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
