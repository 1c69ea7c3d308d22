import random
from collections import namedtuple

import pytest

from app.core.exceptions import NoQuoteAvailable
from app.mood.lexicon import Mood
from app.mood.responder import MoodResponder, should_escalate

FakeQuote = namedtuple("FakeQuote", "text author mood_tag")

QUOTES = [
    FakeQuote("up", "A", "happy"),
    FakeQuote("also up", "B", "happy"),
    FakeQuote("down", "C", "sad"),
    FakeQuote("hold on", "D", "suicidal"),
]


def lookup(mood):
    return [q for q in QUOTES if q.mood_tag == mood.value]


def test_respond_returns_quote_for_requested_mood():
    responder = MoodResponder(lookup, rng=random.Random(1))
    for _ in range(25):
        result = responder.respond(Mood.HAPPY)
        assert result.mood == Mood.HAPPY
        assert result.quote.mood_tag == "happy"


def test_quote_choice_uses_injected_random_source():
    first = MoodResponder(lookup, rng=random.Random(42)).respond(Mood.HAPPY).quote
    second = MoodResponder(lookup, rng=random.Random(42)).respond(Mood.HAPPY).quote
    assert first == second


def test_every_candidate_can_be_chosen():
    responder = MoodResponder(lookup, rng=random.Random(7))
    seen = {responder.respond(Mood.HAPPY).quote.text for _ in range(200)}
    assert seen == {"up", "also up"}


def test_mistagged_quotes_from_lookup_are_ignored():
    responder = MoodResponder(lambda mood: QUOTES, rng=random.Random(3))
    for _ in range(25):
        assert responder.respond(Mood.SAD).quote.mood_tag == "sad"


def test_empty_category_raises_no_quote_available():
    responder = MoodResponder(lookup)
    with pytest.raises(NoQuoteAvailable) as exc:
        responder.respond(Mood.ANXIOUS)
    assert exc.value.mood == "anxious"


def test_analyze_classifies_then_selects():
    responder = MoodResponder(lookup, rng=random.Random(0))
    result = responder.analyze("I just want to die")
    assert result.mood == Mood.SUICIDAL
    assert result.quote.text == "hold on"


@pytest.mark.parametrize(
    "mood,has_contact,expected",
    [
        (Mood.SUICIDAL, True, True),
        (Mood.SUICIDAL, False, False),
        (Mood.SAD, True, False),
        (Mood.ANXIOUS, True, False),
        (Mood.HAPPY, True, False),
        (Mood.NEUTRAL, True, False),
        ("suicidal", True, True),
    ],
)
def test_should_escalate(mood, has_contact, expected):
    assert should_escalate(mood, has_contact) is expected
    assert MoodResponder.should_escalate(mood, has_contact) is expected
