from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple


class Mood(str, Enum):
    SUICIDAL = "suicidal"
    SAD = "sad"
    ANXIOUS = "anxious"
    HAPPY = "happy"
    NEUTRAL = "neutral"


# Tie-break precedence for the scored categories, highest first: the more
# concerning mood wins an equal score.
SCORED_MOODS: Tuple[Mood, ...] = (Mood.SAD, Mood.ANXIOUS, Mood.HAPPY)


@dataclass(frozen=True)
class Lexicon:
    """
    Read-only trigger phrases per mood category.

    Phrases are stored lower-cased and de-duplicated in their original order.
    `neutral` has no phrases; it is what the classifier falls back to.
    """

    phrases: Mapping[Mood, Tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self):
        normalized = {}
        for mood, words in self.phrases.items():
            mood = Mood(mood)
            if mood is Mood.NEUTRAL:
                raise ValueError("neutral cannot carry trigger phrases")
            cleaned = []
            for word in words:
                word = word.strip().lower()
                if word and word not in cleaned:
                    cleaned.append(word)
            normalized[mood] = tuple(cleaned)
        for mood in (Mood.SUICIDAL, *SCORED_MOODS):
            normalized.setdefault(mood, ())
        object.__setattr__(self, "phrases", MappingProxyType(normalized))

    def for_mood(self, mood: Mood) -> Tuple[str, ...]:
        return self.phrases.get(Mood(mood), ())


DEFAULT_LEXICON = Lexicon(
    phrases={
        Mood.SUICIDAL: (
            "kill myself", "end it all", "want to die", "suicide", "no point",
            "worthless", "hopeless", "give up", "better off dead", "ending my life",
        ),
        Mood.SAD: (
            "sad", "depressed", "down", "crying", "tears", "grief", "loss",
            "lonely", "empty", "disappointed", "heartbroken", "devastated",
        ),
        Mood.ANXIOUS: (
            "anxious", "worried", "stress", "nervous", "panic", "fear", "scared",
            "overwhelmed", "restless", "tense", "uneasy", "concerned",
        ),
        Mood.HAPPY: (
            "happy", "joy", "excited", "great", "wonderful", "amazing", "love",
            "grateful", "blessed", "fantastic", "excellent", "thrilled", "delighted",
        ),
    }
)
