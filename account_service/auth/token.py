# auth/token.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt


class TokenError(Exception):
    """Raised when a session token is malformed, forged or expired."""


@dataclass(frozen=True)
class SigningKey:
    secret: str
    algorithm: str = "HS256"

    def __repr__(self) -> str:
        return f"SigningKey(algorithm={self.algorithm!r})"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenIssuer:
    def __init__(self, key: SigningKey):
        self.key = key

    def issue(self, user_id, ttl: timedelta, now: Optional[datetime] = None) -> str:
        now = now or _utcnow()
        claims = {"sub": str(user_id), "exp": int((now + ttl).timestamp())}
        return jwt.encode(claims, self.key.secret, algorithm=self.key.algorithm)


class TokenVerifier:
    def __init__(self, key: SigningKey):
        self.key = key

    def verify(self, token: str, now: Optional[datetime] = None) -> str:
        """Return the token subject if the signature holds and ``now < exp``."""
        try:
            # expiry is checked below against the caller's clock
            payload = jwt.decode(
                token,
                self.key.secret,
                algorithms=[self.key.algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            raise TokenError("Could not validate credentials") from e

        sub = payload.get("sub")
        exp = payload.get("exp")
        if sub is None or not isinstance(exp, (int, float)):
            raise TokenError("Invalid token payload")

        now = now or _utcnow()
        if now.timestamp() >= exp:
            raise TokenError("Token expired")
        return sub
