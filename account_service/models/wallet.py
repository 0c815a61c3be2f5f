# models/wallet.py
from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session, relationship

from account_service.database import Base


class Wallet(Base):
    __tablename__ = "wallets"

    id = Column(Integer, primary_key=True, index=True)
    address = Column(String(255), unique=True, index=True, nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="wallets")


def upsert_wallet(db: Session, address: str, user_id: int) -> Wallet:
    """Point ``address`` at ``user_id``, creating the row if needed. Last writer wins."""
    dialect = db.get_bind().dialect.name
    if dialect in ("sqlite", "postgresql"):
        insert = sqlite_insert if dialect == "sqlite" else pg_insert
        stmt = insert(Wallet).values(address=address, user_id=user_id)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Wallet.address],
            set_={"user_id": stmt.excluded.user_id, "updated_at": func.now()},
        )
        db.execute(stmt)
    else:
        wallet = db.execute(select(Wallet).where(Wallet.address == address)).scalar_one_or_none()
        if wallet is None:
            db.add(Wallet(address=address, user_id=user_id))
        else:
            wallet.user_id = user_id
    db.commit()

    wallet = db.execute(select(Wallet).where(Wallet.address == address)).scalar_one()
    db.refresh(wallet)
    return wallet
