# schemas/achievement_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AchievementOut(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    xp: int = 0
    earned_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
