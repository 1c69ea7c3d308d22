from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.auth.models import User
from app.auth.service import hash_password
from app.journals.db import get_journal_entries, get_journal_entries_in_range
from app.mood.lexicon import Mood
from app.users.schemas import ProfileUpdate, UserStats


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC.
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value.astimezone(timezone.utc)


def update_profile(user: User, updates: ProfileUpdate, db: Session) -> User:
    """
    Applies a partial profile update.

    Blank trusted-contact values clear the field. A new password is re-hashed.

    Args:
        user (User): The currently authenticated user object.
        updates (ProfileUpdate): Fields to change.
        db (Session): Active DB session.

    Returns:
        User: The updated user object.
    """
    update_data = updates.model_dump(exclude_unset=True)
    password = update_data.pop("password", None)
    for field in ("trusted_email", "trusted_phone", "photo_url"):
        if field in update_data:
            update_data[field] = (update_data[field] or "").strip() or None
    for field, value in update_data.items():
        if field == "name" and not value:
            continue
        setattr(user, field, value)
    if password:
        user.password = hash_password(password)
    db.commit()
    db.refresh(user)
    return user


def current_streak(days: Iterable[date], today: date) -> int:
    """Counts consecutive days with at least one entry, ending today."""
    day_set = set(days)
    streak = 0
    day = today
    while day in day_set:
        streak += 1
        day -= timedelta(days=1)
    return streak


def most_common_mood(moods: Iterable[str]) -> str:
    counts = Counter(moods)
    if not counts:
        return Mood.NEUTRAL.value
    return counts.most_common(1)[0][0]


def get_user_stats(db: Session, user_id: UUID, now: Optional[datetime] = None) -> UserStats:
    now = _as_utc(now or datetime.now(timezone.utc))
    entries = get_journal_entries(db, user_id, limit=None)
    created = [(_as_utc(e.created_at), e.mood) for e in entries]

    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)
    return UserStats(
        weekly_entries=sum(1 for ts, _ in created if ts > week_ago),
        current_streak=current_streak((ts.date() for ts, _ in created), now.date()),
        common_mood=most_common_mood(mood for ts, mood in created if ts > month_ago),
    )


def get_weekly_moods(db: Session, user_id: UUID, now: Optional[datetime] = None) -> Dict[str, Dict[str, int]]:
    """
    Groups the last seven days of entries by day and mood.

    Returns:
        Dict[str, Dict[str, int]]: {"YYYY-MM-DD": {mood: count}}.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    entries = get_journal_entries_in_range(db, user_id, now - timedelta(days=7), now)
    grouped: Dict[str, Dict[str, int]] = {}
    for entry in entries:
        day = _as_utc(entry.created_at).date().isoformat()
        grouped.setdefault(day, {})
        grouped[day][entry.mood] = grouped[day].get(entry.mood, 0) + 1
    return grouped
