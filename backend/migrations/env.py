from __future__ import annotations
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context
import os, sys

# Allow importing passport_authz when alembic runs from backend/
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from passport_authz.config.settings import load_settings  # noqa: E402
from passport_authz.models.authz import Base  # noqa: E402
import passport_authz.models.device_passport  # noqa: E402,F401
import passport_authz.models.service_request  # noqa: E402,F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Same DATABASE_URL resolution (.env, environment, default) as create_app
config.set_main_option('sqlalchemy.url', load_settings()['DATABASE_URL'])

target_metadata = Base.metadata


def _is_sqlite(url: str) -> bool:
    return url.startswith('sqlite')


def run_migrations_offline():
    url = config.get_main_option('sqlalchemy.url')
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=_is_sqlite(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        # SQLite cannot ALTER most columns in place; batch mode recreates the table
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == 'sqlite',
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
