from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from app.mood.lexicon import DEFAULT_LEXICON, SCORED_MOODS, Lexicon, Mood


@dataclass(frozen=True)
class Classification:
    mood: Mood
    matches: Dict[Mood, Tuple[str, ...]] = field(default_factory=dict)

    def score(self, mood: Mood) -> int:
        return len(self.matches.get(mood, ()))


class MoodClassifier:
    """
    Rule-based mood classifier over a keyword lexicon.

    Any suicidal phrase wins outright. Otherwise each of sad, anxious and
    happy scores the number of distinct phrases contained in the text; the
    highest score wins, ties go to the earlier mood in SCORED_MOODS, and a
    text with no matches is neutral.
    """

    def __init__(self, lexicon: Lexicon = DEFAULT_LEXICON):
        self.lexicon = lexicon

    @staticmethod
    def _matches(text: str, phrases: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(p for p in phrases if p in text)

    def explain(self, text: Optional[str]) -> Classification:
        lowered = str(text).lower() if text is not None else ""

        suicidal = self._matches(lowered, self.lexicon.for_mood(Mood.SUICIDAL))
        if suicidal:
            return Classification(Mood.SUICIDAL, {Mood.SUICIDAL: suicidal})

        matches = {mood: self._matches(lowered, self.lexicon.for_mood(mood)) for mood in SCORED_MOODS}
        best = Mood.NEUTRAL
        best_score = 0
        for mood in SCORED_MOODS:
            score = len(matches[mood])
            if score > best_score:
                best, best_score = mood, score
        return Classification(best, matches)

    def classify(self, text: Optional[str]) -> Mood:
        return self.explain(text).mood
