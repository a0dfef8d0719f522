from __future__ import annotations
from logging.config import fileConfig
from sqlalchemy import engine_from_config, pool
from alembic import context
import os, sys

# Allow importing the p2p package
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from p2p.models.staff import Base  # noqa: E402
# Every model module must be imported so its tables land on Base.metadata
import p2p.models.requisition  # noqa: F401,E402
import p2p.models.quotation  # noqa: F401,E402
import p2p.models.purchase_order  # noqa: F401,E402
import p2p.models.receipt  # noqa: F401,E402
import p2p.models.quality_check  # noqa: F401,E402
import p2p.models.stock_planning  # noqa: F401,E402
import p2p.models.notification  # noqa: F401,E402

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def get_url():
    return os.getenv('DATABASE_URL', 'sqlite:///dev.db')


config.set_main_option('sqlalchemy.url', get_url())

target_metadata = Base.metadata


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix='sqlalchemy.',
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
