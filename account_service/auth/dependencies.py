"""
FastAPI dependencies for authentication.

The app builds one ``AuthServices`` bundle at startup and stores it on
``app.state.auth``; routes pull it in through ``get_auth`` and resolve
the caller with ``get_current_user``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.orm import Session

from account_service.auth.password import PasswordHasher
from account_service.auth.session import SessionCookie
from account_service.auth.token import SigningKey, TokenError, TokenIssuer, TokenVerifier
from account_service.core.config import Settings
from account_service.core.errors import AuthenticationError
from account_service.database import get_db
from account_service.models.user import User
from account_service.schemas.user_schema import AuthenticatedUser

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)  # don't auto-fail if no header


@dataclass
class AuthServices:
    settings: Settings
    hasher: PasswordHasher
    issuer: TokenIssuer
    verifier: TokenVerifier
    cookie: SessionCookie

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthServices":
        key = SigningKey(secret=settings.JWT_SECRET, algorithm=settings.JWT_ALG)
        return cls(
            settings=settings,
            hasher=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
            issuer=TokenIssuer(key),
            verifier=TokenVerifier(key),
            cookie=SessionCookie(
                name=settings.SESSION_COOKIE_NAME,
                secure=settings.SESSION_COOKIE_SECURE,
                samesite=settings.SESSION_COOKIE_SAMESITE,
                domain=settings.SESSION_COOKIE_DOMAIN,
            ),
        )


def get_auth(request: Request) -> AuthServices:
    return request.app.state.auth


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
    auth: AuthServices = Depends(get_auth),
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> AuthenticatedUser:
    """
    Resolve current user from:
      1) Authorization: Bearer <token>  (API clients, manual testing)
      2) Cookie: settings.SESSION_COOKIE_NAME (browser session)
    """
    token = credentials.credentials if credentials else request.cookies.get(auth.cookie.name)
    if not token:
        raise AuthenticationError("Not authenticated")

    try:
        subject = auth.verifier.verify(token)
    except TokenError as e:
        logger.info("Rejected session token: %s", e)
        raise AuthenticationError("Could not validate credentials")

    try:
        user_id = int(subject)
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    user = db.execute(select(User).where(User.id == user_id)).scalar_one_or_none()
    if not user:
        logger.warning("Session token for unknown user %s", user_id)
        raise AuthenticationError("Could not validate credentials")
    return AuthenticatedUser.model_validate(user)
