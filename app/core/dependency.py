# app/core/dependency.py
import random
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.mood.classifier import MoodClassifier
from app.mood.escalation import AlertDispatcher, SmtpAlertDispatcher
from app.mood.lexicon import DEFAULT_LEXICON
from app.mood.responder import MoodResponder
from app.quotes.db import get_quotes_by_mood


@lru_cache(maxsize=None)
def get_classifier() -> MoodClassifier:
    return MoodClassifier(DEFAULT_LEXICON)


@lru_cache(maxsize=None)
def get_random() -> random.Random:
    return random.SystemRandom()


@lru_cache(maxsize=None)
def get_alert_dispatcher() -> AlertDispatcher:
    return SmtpAlertDispatcher()


def get_responder(
    db: Session = Depends(get_db),
    classifier: MoodClassifier = Depends(get_classifier),
    rng: random.Random = Depends(get_random),
) -> MoodResponder:
    return MoodResponder(lambda mood: get_quotes_by_mood(db, mood), classifier=classifier, rng=rng)
