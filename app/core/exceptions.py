class JournalError(Exception):
    """Base class for errors raised by the journal and mood pipeline."""


class InvalidInput(JournalError):
    """Entry text missing or unusable at the API boundary."""


class NoQuoteAvailable(JournalError):
    """No quote is tagged with the requested mood."""

    def __init__(self, mood: str):
        super().__init__(f"No quote available for mood '{mood}'")
        self.mood = mood


class NotificationDispatchFailed(JournalError):
    """An emergency alert could not be delivered."""


class PersistenceFailed(JournalError):
    """A journal entry could not be written."""
