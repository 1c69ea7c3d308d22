from datetime import datetime
from uuid import UUID
from pydantic import BaseModel


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class QuoteOut(BaseSchema):
    id: UUID
    text: str
    author: str
    mood_tag: str


class SavedQuoteOut(BaseSchema):
    id: UUID
    user_id: UUID
    quote_id: UUID
    saved_at: datetime
    quote: QuoteOut


class QuoteSavedStatus(BaseModel):
    is_saved: bool
