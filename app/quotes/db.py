import logging
from uuid import UUID
from typing import List, Optional

from sqlalchemy.orm import Session
from app.quotes.models import Quote, SavedQuote
from app.quotes.seed import SEED_QUOTES

logger = logging.getLogger(__name__)


# Quote CRUD
def get_quote(db: Session, quote_id: UUID) -> Optional[Quote]:
    return db.query(Quote).filter(Quote.id == quote_id).first()


def get_quotes_by_mood(db: Session, mood: str) -> List[Quote]:
    """
    Retrieves every quote tagged with a mood.

    Args:
        db (Session): SQLAlchemy session.
        mood (str): Mood tag to match.

    Returns:
        List[Quote]: Matching quotes, empty if none.
    """
    return db.query(Quote).filter(Quote.mood_tag == str(getattr(mood, "value", mood))).all()


def seed_quotes(db: Session) -> int:
    """
    Loads the default quotes when the quotes table is empty.

    Returns:
        int: Number of quotes inserted.
    """
    if db.query(Quote).first() is not None:
        return 0
    db.add_all(Quote(text=text, author=author, mood_tag=mood.value) for text, author, mood in SEED_QUOTES)
    db.commit()
    logger.info("Seeded %d quotes", len(SEED_QUOTES))
    return len(SEED_QUOTES)


# Saved quotes
def get_saved_quote(db: Session, user_id: UUID, quote_id: UUID) -> Optional[SavedQuote]:
    return db.query(SavedQuote).filter(
        SavedQuote.user_id == user_id,
        SavedQuote.quote_id == quote_id
    ).first()


def save_quote(db: Session, user_id: UUID, quote_id: UUID) -> SavedQuote:
    existing = get_saved_quote(db, user_id, quote_id)
    if existing:
        return existing
    saved = SavedQuote(user_id=user_id, quote_id=quote_id)
    db.add(saved)
    db.commit()
    db.refresh(saved)
    return saved


def unsave_quote(db: Session, user_id: UUID, quote_id: UUID) -> Optional[SavedQuote]:
    saved = get_saved_quote(db, user_id, quote_id)
    if saved:
        db.delete(saved)
        db.commit()
        return saved
    return None


def get_saved_quotes(db: Session, user_id: UUID) -> List[SavedQuote]:
    return (
        db.query(SavedQuote)
        .filter(SavedQuote.user_id == user_id)
        .order_by(SavedQuote.saved_at.desc())
        .all()
    )


def is_quote_saved(db: Session, user_id: UUID, quote_id: UUID) -> bool:
    return get_saved_quote(db, user_id, quote_id) is not None
