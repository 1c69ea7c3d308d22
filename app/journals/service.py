import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from app.auth.models import User
from app.core.exceptions import InvalidInput
from app.journals.db import create_journal_entry, get_trusted_contact
from app.journals.models import JournalEntry
from app.mood.escalation import AlertDispatcher, EmergencyAlert, send_emergency_alert
from app.mood.lexicon import Mood
from app.mood.responder import MoodResponder, MoodResponse, should_escalate

logger = logging.getLogger(__name__)

# Called with (function, *args); FastAPI's BackgroundTasks.add_task fits.
Scheduler = Callable[..., Any]


@dataclass
class SavedEntry:
    entry: JournalEntry
    response: MoodResponse
    alert: Optional[EmergencyAlert] = None


def _require_text(entry_text: Any) -> str:
    if not isinstance(entry_text, str) or not entry_text.strip():
        raise InvalidInput("Entry text is required")
    return entry_text


def analyze_entry(entry_text: str, responder: MoodResponder) -> MoodResponse:
    """
    Classifies an entry and picks a quote for it without persisting anything.

    Raises:
        InvalidInput: If the text is missing or blank.
        NoQuoteAvailable: If no quote exists for the resulting mood.
    """
    return responder.analyze(_require_text(entry_text))


def save_entry(
    db: Session,
    user: User,
    entry_text: str,
    responder: MoodResponder,
    dispatcher: AlertDispatcher,
    schedule: Optional[Scheduler] = None,
    client_mood: Optional[Any] = None,
) -> SavedEntry:
    """
    Classifies, persists and, for suicidal entries, escalates a journal entry.

    The mood is always derived here from the text; `client_mood` is only
    compared for logging. The alert is handed to `schedule` (or sent inline
    when no scheduler is given) only after the entry is committed, and its
    failure never propagates.

    Args:
        db (Session): SQLAlchemy session.
        user (User): Authenticated author.
        entry_text (str): Entry text.
        responder (MoodResponder): Classifier plus quote selection.
        dispatcher (AlertDispatcher): Emergency alert transport.
        schedule (Callable): Runs the alert after the response, e.g. BackgroundTasks.add_task.
        client_mood (Any): Mood previewed by the client, ignored.

    Returns:
        SavedEntry: The committed entry, the mood response and the alert if one was scheduled.

    Raises:
        InvalidInput: If the text is missing or blank.
        NoQuoteAvailable: If no quote exists for the mood.
        PersistenceFailed: If the entry could not be written.
    """
    entry_text = _require_text(entry_text)
    response = responder.analyze(entry_text)
    mood = response.mood

    if client_mood and client_mood != mood.value:
        logger.warning(
            "Client mood %r disagrees with server mood %r for user %s; using server mood",
            client_mood, mood.value, user.id,
        )

    entry = create_journal_entry(db, user.id, entry_text, mood)
    logger.info("Saved journal entry %s for user %s with mood %s", entry.id, user.id, mood.value)

    # The entry is committed; nothing past this point may fail the save.
    try:
        alert = _escalate(db, user, entry, mood, dispatcher, schedule)
    except Exception:
        db.rollback()
        logger.exception("Escalation check failed for journal entry %s; entry kept without alert", entry.id)
        alert = None
    return SavedEntry(entry=entry, response=response, alert=alert)


def _escalate(
    db: Session,
    user: User,
    entry: JournalEntry,
    mood: Mood,
    dispatcher: AlertDispatcher,
    schedule: Optional[Scheduler],
) -> Optional[EmergencyAlert]:
    trusted_contact = get_trusted_contact(db, user.id)
    if not should_escalate(mood, trusted_contact is not None):
        if mood is Mood.SUICIDAL:
            logger.warning("No trusted email configured for user %s, skipping emergency alert", user.id)
        return None

    alert = EmergencyAlert.for_entry(
        trusted_contact, user.name, user.email, entry.entry_text, created_at=entry.created_at
    )
    if schedule is not None:
        schedule(send_emergency_alert, dispatcher, alert)
    else:
        send_emergency_alert(dispatcher, alert)
    return alert
