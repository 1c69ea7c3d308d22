from uuid import UUID
from typing import List, Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, Security, status
from sqlalchemy.orm import Session

from app.auth.service import get_current_user_id
from app.core.database import get_db
from app.quotes.schemas import QuoteSavedStatus, SavedQuoteOut
from app.quotes.db import (
    get_quote,
    get_saved_quotes,
    is_quote_saved,
    save_quote,
    unsave_quote,
)

router = APIRouter(prefix="/api/quotes", tags=["Quotes"])
logger = logging.getLogger(__name__)


@router.get(
    "/saved",
    response_model=List[SavedQuoteOut],
    summary="Get saved quotes",
    description="Retrieve the quotes the authenticated user has saved, newest first.",
    responses={
        200: {"description": "Saved quotes retrieved successfully."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to fetch saved quotes."},
    },
)
def get_saved_quotes_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> List[SavedQuoteOut]:
    try:
        return get_saved_quotes(db, user_id)
    except Exception as e:
        logger.error(f"Error fetching saved quotes for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch saved quotes")


@router.post(
    "/{quote_id}/save",
    response_model=SavedQuoteOut,
    status_code=status.HTTP_201_CREATED,
    summary="Save a quote",
    responses={
        201: {"description": "Quote saved."},
        401: {"description": "Unauthorized."},
        404: {"description": "Quote not found."},
        500: {"description": "Failed to save quote."},
    },
)
def save_quote_route(
    quote_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> SavedQuoteOut:
    if get_quote(db, quote_id) is None:
        raise HTTPException(status_code=404, detail="Quote not found")
    try:
        return save_quote(db, user_id, quote_id)
    except Exception as e:
        db.rollback()
        logger.error(f"Error saving quote {quote_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save quote")


@router.delete(
    "/{quote_id}/save",
    response_model=Dict[str, bool],
    summary="Unsave a quote",
    responses={
        200: {"description": "Quote removed from saved quotes."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to unsave quote."},
    },
)
def unsave_quote_route(
    quote_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> Dict[str, bool]:
    try:
        unsave_quote(db, user_id, quote_id)
        return {"success": True}
    except Exception as e:
        db.rollback()
        logger.error(f"Error unsaving quote {quote_id} for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to unsave quote")


@router.get(
    "/{quote_id}/saved",
    response_model=QuoteSavedStatus,
    summary="Check if a quote is saved",
    responses={
        200: {"description": "Save status returned."},
        401: {"description": "Unauthorized."},
    },
)
def quote_saved_status_route(
    quote_id: UUID,
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> QuoteSavedStatus:
    return QuoteSavedStatus(is_saved=is_quote_saved(db, user_id, quote_id))
