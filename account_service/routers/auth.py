import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from account_service.auth.dependencies import AuthServices, get_auth
from account_service.core.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    require_fields,
)
from account_service.database import get_db
from account_service.models.user import User
from account_service.schemas.user_schema import (
    AuthResponse,
    LoginRequest,
    OAuthLoginRequest,
    RegisterRequest,
    UserSummary,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Auth"])


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _find_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def _auth_response(message: str, user: User) -> AuthResponse:
    return AuthResponse(message=message, user=UserSummary.model_validate(user))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterRequest,
    response: Response,
    db: Session = Depends(get_db),
    auth: AuthServices = Depends(get_auth),
):
    require_fields(payload, ["email", "password", "name", "address", "phone"])
    email = _normalize_email(payload.email)

    if _find_by_email(db, email):
        raise ConflictError("User already exists")

    user = User(
        email=email,
        password=auth.hasher.hash(payload.password),
        name=payload.name.strip(),
        address=payload.address.strip(),
        phone=payload.phone.strip(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        db.rollback()
        raise ConflictError("User already exists")
    db.refresh(user)

    ttl = auth.settings.register_token_ttl()
    auth.cookie.set(response, auth.issuer.issue(user.id, ttl), ttl)
    logger.info("Registered user %s", user.id)

    return _auth_response("User registered successfully", user)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    auth: AuthServices = Depends(get_auth),
):
    require_fields(payload, ["email", "password"])

    user = _find_by_email(db, _normalize_email(payload.email))
    if not user:
        raise NotFoundError("User not found")

    if not auth.hasher.verify(payload.password, user.password):
        logger.info("Wrong password for user %s", user.id)
        raise AuthenticationError("Wrong password", status_code=status.HTTP_400_BAD_REQUEST)

    ttl = auth.settings.login_token_ttl()
    auth.cookie.set(response, auth.issuer.issue(user.id, ttl), ttl)
    logger.info("Login: user %s", user.id)

    return _auth_response("User logged in successfully", user)


@router.post("/oauth/login", response_model=AuthResponse)
def oauth_login(
    payload: OAuthLoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    auth: AuthServices = Depends(get_auth),
):
    require_fields(payload, ["email", "name"])
    email = _normalize_email(payload.email)

    user = _find_by_email(db, email)
    created = False
    if not user:
        user = User(email=email, name=payload.name.strip(), password="")
        db.add(user)
        try:
            db.commit()
            db.refresh(user)
            created = True
        except IntegrityError:
            # a concurrent first login created the row; use that one
            db.rollback()
            user = _find_by_email(db, email)
            if user is None:
                raise

    ttl = auth.settings.oauth_token_ttl()
    auth.cookie.set(response, auth.issuer.issue(user.id, ttl), ttl)

    if created:
        response.status_code = status.HTTP_201_CREATED
        logger.info("Created OAuth account for user %s", user.id)
        return _auth_response("User registered successfully", user)

    logger.info("OAuth login: user %s", user.id)
    return _auth_response("User logged in successfully", user)


@router.post("/signout")
def sign_out(response: Response, auth: AuthServices = Depends(get_auth)):
    auth.cookie.clear(response)
    return {"message": "Signed out successfully"}
