import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from app.core.exceptions import NoQuoteAvailable
from app.mood.classifier import MoodClassifier
from app.mood.lexicon import Mood

logger = logging.getLogger(__name__)

QuoteLookup = Callable[[Mood], Sequence[Any]]


@dataclass(frozen=True)
class MoodResponse:
    mood: Mood
    quote: Any


def should_escalate(mood: Mood, has_trusted_contact: bool) -> bool:
    """
    Decides whether a saved entry triggers an emergency alert.

    Args:
        mood (Mood): Final mood label of the entry.
        has_trusted_contact (bool): Whether the user configured a trusted email.

    Returns:
        bool: True only for a suicidal mood with a trusted contact on file.
    """
    return Mood(mood) is Mood.SUICIDAL and bool(has_trusted_contact)


class MoodResponder:
    def __init__(
        self,
        quote_lookup: QuoteLookup,
        classifier: Optional[MoodClassifier] = None,
        rng: Optional[random.Random] = None,
    ):
        self.quote_lookup = quote_lookup
        self.classifier = classifier or MoodClassifier()
        self.rng = rng or random.Random()

    def select_quote(self, mood: Mood) -> Any:
        mood = Mood(mood)
        candidates = [q for q in self.quote_lookup(mood) if q.mood_tag == mood.value]
        if not candidates:
            logger.error("No quotes tagged with mood %s", mood.value)
            raise NoQuoteAvailable(mood.value)
        return self.rng.choice(candidates)

    def respond(self, mood: Mood) -> MoodResponse:
        mood = Mood(mood)
        return MoodResponse(mood=mood, quote=self.select_quote(mood))

    def analyze(self, text: str) -> MoodResponse:
        return self.respond(self.classifier.classify(text))

    should_escalate = staticmethod(should_escalate)
