from uuid import UUID
from typing import Dict
import logging

from fastapi import APIRouter, Depends, HTTPException, Security
from sqlalchemy.orm import Session

from app.auth.service import get_current_user_id
from app.core.database import get_db
from app.users.service import get_weekly_moods

router = APIRouter(prefix="/api/mood", tags=["Mood"])
logger = logging.getLogger(__name__)


@router.get(
    "/weekly",
    response_model=Dict[str, Dict[str, int]],
    summary="Mood counts for the last seven days",
    responses={
        200: {"description": "Mood counts grouped by day."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to fetch weekly mood data."},
    },
)
def get_weekly_mood_route(
    db: Session = Depends(get_db),
    user_id: UUID = Security(get_current_user_id),
) -> Dict[str, Dict[str, int]]:
    try:
        return get_weekly_moods(db, user_id)
    except Exception as e:
        logger.error(f"Weekly mood fetch failed for user {user_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch weekly mood data")
