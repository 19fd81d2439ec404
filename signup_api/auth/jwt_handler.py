from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from signup_api.core.config import Settings


@dataclass(frozen=True)
class TokenIssuer:
    secret_key: str
    algorithm: str = "HS256"
    expires_minutes: int = 23 * 60

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenIssuer":
        return cls(
            secret_key=settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm,
            expires_minutes=settings.jwt_expires_minutes,
        )

    def issue(self, claims: dict[str, Any], now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            **claims,
            "exp": issued_at + timedelta(minutes=self.expires_minutes),
            "iat": issued_at,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def create_access_token(self, username: str, now: datetime | None = None) -> str:
        return self.issue({"id": username}, now=now)

    def decode(self, token: str) -> dict[str, Any]:
        return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
