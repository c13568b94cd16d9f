"""Alembic environment.

Runs under ``flask db ...`` (an app context already exists) or plain
``alembic -c habitflow/migrations/alembic.ini ...``, in which case an app
is built from the ``habitflow_env`` option or ``APP_ENV``.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from flask import current_app, has_app_context
from sqlalchemy import engine_from_config, pool

from habitflow.extensions import db

config = context.config

if config.config_file_name:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _database_url() -> str:
    if has_app_context():
        return current_app.config["SQLALCHEMY_DATABASE_URI"]
    from habitflow import create_app

    env_name = os.environ.get("APP_ENV") or config.get_main_option("habitflow_env", "development")
    return create_app(env_name).config["SQLALCHEMY_DATABASE_URI"]


def _configure(**kwargs) -> None:
    context.configure(target_metadata=db.metadata, compare_type=True, **kwargs)


def run_migrations_offline() -> None:
    _configure(url=_database_url(), literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = _database_url()
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        # sqlite cannot ALTER constraints in place
        _configure(connection=connection, render_as_batch=connection.dialect.name == "sqlite")
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
