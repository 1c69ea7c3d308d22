from datetime import datetime
from uuid import UUID
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.auth.models import User
from app.core.exceptions import PersistenceFailed
from app.journals.models import JournalEntry


def create_journal_entry(db: Session, user_id: UUID, entry_text: str, mood: str) -> JournalEntry:
    """
    Durably records one journal entry.

    Args:
        db (Session): SQLAlchemy session.
        user_id (UUID): Owner of the entry.
        entry_text (str): Entry text as written.
        mood (str): Mood label computed at save time.

    Returns:
        JournalEntry: The committed entry with id and created_at assigned.

    Raises:
        PersistenceFailed: If the write fails; the session is rolled back.
    """
    entry = JournalEntry(user_id=user_id, entry_text=entry_text, mood=str(getattr(mood, "value", mood)))
    try:
        db.add(entry)
        db.commit()
        db.refresh(entry)
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceFailed(str(e)) from e
    return entry


def get_journal_entries(db: Session, user_id: UUID, skip: int = 0, limit: int = 100) -> List[JournalEntry]:
    return (
        db.query(JournalEntry)
        .filter(JournalEntry.user_id == user_id)
        .order_by(JournalEntry.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def get_journal_entries_in_range(db: Session, user_id: UUID, start: datetime, end: datetime) -> List[JournalEntry]:
    return (
        db.query(JournalEntry)
        .filter(
            JournalEntry.user_id == user_id,
            JournalEntry.created_at >= start,
            JournalEntry.created_at <= end,
        )
        .order_by(JournalEntry.created_at.desc())
        .all()
    )


def get_trusted_contact(db: Session, user_id: UUID) -> Optional[str]:
    """
    Reads the user's trusted-contact email as currently stored.

    Returns:
        Optional[str]: The address, or None when unset or blank.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user or not user.trusted_email or not user.trusted_email.strip():
        return None
    return user.trusted_email.strip()
