from typing import Any, Optional
from uuid import UUID
from datetime import datetime
from pydantic import BaseModel, Field, StrictStr

from app.mood.lexicon import Mood
from app.quotes.schemas import QuoteOut


class BaseSchema(BaseModel):
    class Config:
        from_attributes = True


class JournalEntryOut(BaseSchema):
    id: UUID
    user_id: UUID
    entry_text: str
    mood: Mood
    created_at: datetime


class JournalAnalyzeRequest(BaseModel):
    class Config:
        populate_by_name = True

    entry_text: StrictStr = Field(alias="entryText")


class JournalSaveRequest(JournalAnalyzeRequest):
    # Accepted for compatibility; the server always re-derives the mood.
    mood: Optional[Any] = None


class MoodAnalysisResponse(BaseModel):
    mood: Mood
    quote: QuoteOut


class JournalSaveResponse(JournalEntryOut):
    quote: Optional[QuoteOut] = None
    alert_scheduled: bool = False
