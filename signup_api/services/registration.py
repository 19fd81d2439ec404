"""User registration: uniqueness check, password hashing, persistence, token."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Union

from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import sessionmaker

from signup_api.auth.jwt_handler import TokenIssuer
from signup_api.auth.passwords import hash_password
from signup_api.models.user import User

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE = "store_unavailable"
INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True)
class UserView:
    id: int
    username: str
    name: str
    password_hash: str


@dataclass(frozen=True)
class Created:
    user: UserView
    token: str


@dataclass(frozen=True)
class Conflict:
    username: str


@dataclass(frozen=True)
class Failed:
    reason: str


RegistrationResult = Union[Created, Conflict, Failed]


class RegistrationService:
    def __init__(
        self,
        session_factory: sessionmaker,
        token_issuer: TokenIssuer,
        password_hasher: Callable[[str], str] = hash_password,
        retry_attempts: int = 3,
        retry_backoff_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._session_factory = session_factory
        self._token_issuer = token_issuer
        self._password_hasher = password_hasher
        self._retry_attempts = max(1, retry_attempts)
        self._retry_backoff_seconds = retry_backoff_seconds
        self._sleep = sleep

    def create_user(self, username: str, name: str, password: str) -> RegistrationResult:
        """Register ``username`` unless it is already taken.

        A taken username is reported as ``Conflict``, including the case where
        a concurrent request inserts it between the lookup and the commit.
        Store outages are retried with exponential backoff before giving up
        with ``Failed``.
        """
        for attempt in range(1, self._retry_attempts + 1):
            try:
                return self._create_user_once(username, name, password)
            except OperationalError:
                if attempt == self._retry_attempts:
                    logger.exception(
                        "User store unavailable after %d attempts; giving up on %s",
                        attempt,
                        username,
                    )
                    return Failed(STORE_UNAVAILABLE)
                delay = self._retry_backoff_seconds * 2 ** (attempt - 1)
                logger.warning(
                    "User store unavailable (attempt %d/%d), retrying in %.2fs",
                    attempt,
                    self._retry_attempts,
                    delay,
                )
                self._sleep(delay)
            except Exception:
                logger.exception("Failed to register user %s", username)
                return Failed(INTERNAL_ERROR)
        return Failed(STORE_UNAVAILABLE)

    def _create_user_once(self, username: str, name: str, password: str) -> RegistrationResult:
        db = self._session_factory()
        try:
            existing = db.query(User).filter(User.username == username).first()
            if existing is not None:
                logger.info("User %s already exists", username)
                return Conflict(username)

            user = User(
                username=username,
                name=name,
                hashed_password=self._password_hasher(password),
            )
            db.add(user)
            try:
                db.flush()
            except IntegrityError:
                db.rollback()
                logger.info("User %s was registered concurrently", username)
                return Conflict(username)

            # the row is only committed once a token exists for it
            try:
                token = self._token_issuer.create_access_token(user.username)
            except Exception:
                db.rollback()
                raise

            db.commit()
            db.refresh(user)

            view = UserView(
                id=user.id,
                username=user.username,
                name=user.name,
                password_hash=user.hashed_password,
            )
        finally:
            db.close()

        logger.info("Registered user %s (id=%s)", view.username, view.id)
        return Created(user=view, token=token)
