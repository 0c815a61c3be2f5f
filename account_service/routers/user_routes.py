import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from account_service.auth.dependencies import get_current_user
from account_service.core.errors import NotFoundError, StoreError, ValidationError, require_fields
from account_service.database import get_db
from account_service.models.achievement import Achievement
from account_service.models.user import User
from account_service.models.wallet import Wallet, upsert_wallet
from account_service.schemas.achievement_schema import AchievementOut
from account_service.schemas.user_schema import AuthenticatedUser, ProfileUpdate, UserResponse
from account_service.schemas.wallet_schema import WalletOut, WalletUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["User"])


@router.get("/me", response_model=UserResponse)
def get_user_details(current_user: AuthenticatedUser = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=UserResponse)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    require_fields(payload, ["name", "address", "phone"])

    user = db.get(User, current_user.id)
    if not user:
        raise NotFoundError("User not found")

    user.name = payload.name.strip()
    user.address = payload.address.strip()
    user.phone = payload.phone.strip()
    db.commit()
    db.refresh(user)

    logger.info("Updated profile for user %s", user.id)
    return user


@router.put("/wallet", response_model=WalletOut)
def update_wallet(
    payload: WalletUpdate,
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    if not payload.wallet_address or not payload.wallet_address.strip():
        raise ValidationError("Please provide a wallet_address")
    address = payload.wallet_address.strip()

    try:
        wallet = upsert_wallet(db, address, current_user.id)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error updating or creating wallet %s for user %s", address, current_user.id)
        raise StoreError()

    logger.info("Wallet %s now owned by user %s", address, current_user.id)
    return wallet


@router.get("/wallet", response_model=list[WalletOut])
def get_wallets(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    return db.execute(
        select(Wallet).where(Wallet.user_id == current_user.id).order_by(Wallet.id)
    ).scalars().all()


@router.get("/achievements", response_model=list[AchievementOut])
def get_achievements(
    db: Session = Depends(get_db),
    current_user: AuthenticatedUser = Depends(get_current_user),
):
    return db.execute(
        select(Achievement).where(Achievement.user_id == current_user.id).order_by(Achievement.id)
    ).scalars().all()
