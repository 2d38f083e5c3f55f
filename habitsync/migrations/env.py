"""Alembic environment for habitsync."""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from habitsync import create_app
from habitsync.extensions import db

# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config

if config.config_file_name and config.file_config.has_section("formatters"):
    fileConfig(config.config_file_name, disable_existing_loggers=False)

_app = None


def get_app():
    global _app
    if _app is None:
        _app = create_app(config.get_main_option("habitsync_env", "development"))
    return _app


def get_url() -> str:
    # An explicit sqlalchemy.url (tests, one-off upgrades) wins over app config.
    explicit = config.get_main_option("sqlalchemy.url")
    if explicit:
        return explicit
    return get_app().config["SQLALCHEMY_DATABASE_URI"]


def get_metadata():
    app = get_app()
    with app.app_context():
        # Importing the controllers via create_app registered every model.
        return db.metadata


target_metadata = get_metadata()


def run_migrations_offline() -> None:
    url = get_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = get_url()

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
