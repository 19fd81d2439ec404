import logging
import os

import pytest

os.environ.setdefault('DATABASE_URL', 'sqlite://')
os.environ.setdefault('ENV_FILE', '')

from signup_api.auth.jwt_handler import TokenIssuer  # noqa: E402
from signup_api.auth.passwords import hash_password  # noqa: E402
from signup_api.core import log  # noqa: E402
from signup_api.database import ensure_user_schema, make_engine, make_session_factory  # noqa: E402

TEST_SECRET = 'test-secret'


def _fast_hash(password: str) -> str:
    return hash_password(password, rounds=4)


@pytest.fixture
def password_hasher():
    return _fast_hash


@pytest.fixture
def db_engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'users.db'}")
    ensure_user_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return make_session_factory(db_engine)


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(secret_key=TEST_SECRET)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    level = root.level
    yield
    for handler in log._installed_handlers:
        root.removeHandler(handler)
        handler.close()
    log._installed_handlers.clear()
    root.setLevel(level)
