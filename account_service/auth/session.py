# auth/session.py
from __future__ import annotations

from datetime import timedelta
from typing import Optional

from fastapi import Response


class SessionCookie:
    """Carries the session token in one cookie with a single attribute policy."""

    def __init__(
        self,
        name: str = "token",
        secure: bool = True,
        samesite: str = "lax",
        domain: Optional[str] = None,
    ):
        self.name = name
        self.secure = secure
        self.samesite = samesite
        self.domain = domain

    def set(self, response: Response, token: str, ttl: timedelta) -> None:
        max_age = int(ttl.total_seconds())
        response.set_cookie(
            key=self.name,
            value=token,
            httponly=True,
            secure=self.secure,
            samesite=self.samesite,
            domain=self.domain,
            max_age=max_age,
            expires=max_age,
            path="/",
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            key=self.name,
            path="/",
            domain=self.domain,
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )
