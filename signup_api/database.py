import logging
from threading import Lock

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


def make_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if database_url in {"sqlite://", "sqlite:///:memory:"}:
            options["poolclass"] = StaticPool
        return create_engine(database_url, **options)
    return create_engine(database_url, pool_pre_ping=True)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=bind,
    )


Base = declarative_base()

_schema_lock = Lock()


def check_connection(bind: Engine) -> None:
    with bind.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Database connected successfully (%s).", bind.url.render_as_string(hide_password=True))


def ensure_user_schema(bind: Engine) -> None:
    """Create the users table, or bring an older one up to date.

    Called once at startup, never from a request. Tables left behind by
    earlier deployments may lack the unique index on username and the
    created_at column.
    """
    with _schema_lock:
        # imported here so the model module can import Base from this one
        from signup_api.models.user import User

        inspector = inspect(bind)

        if User.__tablename__ not in inspector.get_table_names():
            Base.metadata.create_all(bind=bind)
            logger.info('Created table %s', User.__tablename__)
            return

        existing_columns = {column['name'] for column in inspector.get_columns('users')}
        migration_steps = [
            ('name', 'ALTER TABLE users ADD COLUMN name VARCHAR'),
            ('created_at', 'ALTER TABLE users ADD COLUMN created_at TIMESTAMP'),
        ]

        with bind.begin() as connection:
            for column_name, statement in migration_steps:
                if column_name not in existing_columns:
                    logger.warning('Adding missing column users.%s', column_name)
                    connection.execute(text(statement))
            connection.execute(
                text('CREATE UNIQUE INDEX IF NOT EXISTS ix_users_username ON users(username)')
            )
