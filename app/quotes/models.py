import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Uuid, primary_key=True, index=True, default=uuid.uuid4)
    text = Column(String, nullable=False)
    author = Column(String, nullable=False)
    mood_tag = Column(String, index=True, nullable=False)  # suicidal, sad, anxious, happy, neutral


class SavedQuote(Base):
    __tablename__ = "saved_quotes"
    __table_args__ = (UniqueConstraint("user_id", "quote_id", name="uq_saved_quote_user_quote"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)
    quote_id = Column(Uuid, ForeignKey("quotes.id"), nullable=False)
    saved_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    quote = relationship("Quote")
