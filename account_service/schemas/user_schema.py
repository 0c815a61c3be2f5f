# schemas/user_schema.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

# Request bodies keep every field optional so a missing field is reported
# as a 400 with the field names instead of a framework validation error.


class RegisterRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class OAuthLoginRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None


class UserSummary(BaseModel):
    id: int
    email: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    message: str
    user: UserSummary


class UserResponse(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuthenticatedUser(UserResponse):
    """Identity resolved from the session token, handed to protected routes."""

    model_config = ConfigDict(from_attributes=True, frozen=True)
