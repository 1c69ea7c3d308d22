from typing import Optional
from uuid import UUID
from pydantic import BaseModel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class ProfileOut(BaseSchema):
    id: UUID
    name: str
    email: str
    trusted_email: Optional[str] = None
    trusted_phone: Optional[str] = None
    photo_url: Optional[str] = None


class ProfileUpdate(BaseSchema):
    name: Optional[str] = None
    trusted_email: Optional[str] = None
    trusted_phone: Optional[str] = None
    photo_url: Optional[str] = None
    password: Optional[str] = None


class UserStats(BaseModel):
    weekly_entries: int
    current_streak: int
    common_mood: str
