from uuid import UUID
from typing import List
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session

from app.auth.models import User
from app.auth.service import get_current_user, get_current_user_id
from app.core.database import get_db
from app.core.dependency import get_alert_dispatcher, get_responder
from app.core.exceptions import InvalidInput, NoQuoteAvailable, PersistenceFailed
from app.journals.db import get_journal_entries
from app.journals.schemas import (
    JournalAnalyzeRequest,
    JournalEntryOut,
    JournalSaveRequest,
    JournalSaveResponse,
    MoodAnalysisResponse,
)
from app.journals.service import analyze_entry, save_entry
from app.mood.escalation import AlertDispatcher
from app.mood.responder import MoodResponder
from app.quotes.schemas import QuoteOut

router = APIRouter(prefix="/api/journal", tags=["Journal"])
logger = logging.getLogger(__name__)


@router.get(
    "/entries",
    response_model=List[JournalEntryOut],
    summary="Get journal entries",
    description="Retrieve the authenticated user's journal entries, newest first.",
    responses={
        200: {"description": "Journal entries retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to retrieve journal entries."},
    },
)
def get_entries_route(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[JournalEntryOut]:
    try:
        return get_journal_entries(db, user_id, skip, limit)
    except Exception as e:
        logger.error(f"Error fetching journal entries for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch journal entries")


@router.post(
    "/analyze",
    response_model=MoodAnalysisResponse,
    summary="Analyze the mood of an entry",
    description="Classify the entry text and return a matching quote. Nothing is stored.",
    responses={
        200: {"description": "Mood and quote returned."},
        400: {"description": "Entry text is required."},
        401: {"description": "Unauthorized."},
        500: {"description": "No quote available or analysis failed."},
    },
)
def analyze_entry_route(
    body: JournalAnalyzeRequest,
    responder: MoodResponder = Depends(get_responder),
    user_id: UUID = Security(get_current_user_id),
) -> MoodAnalysisResponse:
    try:
        result = analyze_entry(body.entry_text, responder)
        return MoodAnalysisResponse(mood=result.mood, quote=QuoteOut.model_validate(result.quote))
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoQuoteAvailable as e:
        logger.error(f"Mood analysis for user {user_id} found no quote: {e}")
        raise HTTPException(status_code=500, detail="No quote available for mood")
    except Exception as e:
        logger.error(f"Mood analysis failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to analyze mood")


@router.post(
    "/save",
    response_model=JournalSaveResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a journal entry",
    description=(
        "Persist an entry with a mood computed on the server. Any client-supplied mood is ignored. "
        "Suicidal entries notify the user's trusted contact after the response is sent."
    ),
    responses={
        201: {"description": "Journal entry saved."},
        400: {"description": "Entry text is required."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to save journal entry."},
    },
)
def save_entry_route(
    body: JournalSaveRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    responder: MoodResponder = Depends(get_responder),
    dispatcher: AlertDispatcher = Depends(get_alert_dispatcher),
) -> JournalSaveResponse:
    try:
        saved = save_entry(
            db,
            user,
            body.entry_text,
            responder,
            dispatcher,
            schedule=background_tasks.add_task,
            client_mood=body.mood,
        )
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NoQuoteAvailable as e:
        logger.error(f"Save for user {user.id} found no quote: {e}")
        raise HTTPException(status_code=500, detail="No quote available for mood")
    except PersistenceFailed as e:
        logger.error(f"Error saving journal entry for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save journal entry")
    except Exception as e:
        logger.error(f"Error saving journal entry for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save journal entry")

    out = JournalEntryOut.model_validate(saved.entry)
    return JournalSaveResponse(
        **out.model_dump(),
        quote=QuoteOut.model_validate(saved.response.quote),
        alert_scheduled=saved.alert is not None,
    )
