# schemas/wallet_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class WalletUpdate(BaseModel):
    wallet_address: Optional[str] = None


class WalletOut(BaseModel):
    id: int
    address: str
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
