import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.core.database import Base


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Uuid, primary_key=True, index=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), index=True, nullable=False)

    entry_text = Column(Text, nullable=False)
    mood = Column(String, nullable=False)  # frozen at save time
    created_at = Column(DateTime(timezone=True), index=True, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="journals")
