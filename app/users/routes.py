import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.auth.models import User
from app.auth.service import get_current_user
from app.core.database import get_db
from app.users.schemas import ProfileOut, ProfileUpdate, UserStats
from app.users.service import get_user_stats, update_profile

router = APIRouter(prefix="/api/user", tags=["User"])
logger = logging.getLogger(__name__)


@router.get(
    "/profile",
    response_model=ProfileOut,
    summary="Get profile",
    description="Return the authenticated user's profile, including the trusted contact used for emergency alerts.",
    responses={
        200: {"description": "Profile returned."},
        401: {"description": "Unauthorized."},
    },
)
def get_profile_route(user: User = Depends(get_current_user)) -> ProfileOut:
    return ProfileOut.model_validate(user)


@router.put(
    "/profile",
    response_model=ProfileOut,
    summary="Update profile",
    responses={
        200: {"description": "Profile updated."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to update profile."},
    },
)
def update_profile_route(
    updates: ProfileUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> ProfileOut:
    try:
        return ProfileOut.model_validate(update_profile(user, updates, db))
    except Exception as e:
        db.rollback()
        logger.error(f"Profile update failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update profile")


@router.get(
    "/stats",
    response_model=UserStats,
    summary="Get journaling stats",
    description="Entries this week, current daily streak and most common mood over the last 30 days.",
    responses={
        200: {"description": "Stats returned."},
        401: {"description": "Unauthorized."},
        500: {"description": "Failed to fetch stats."},
    },
)
def get_stats_route(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
) -> UserStats:
    try:
        return get_user_stats(db, user.id)
    except Exception as e:
        logger.error(f"Stats fetch failed for user {user.id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch user stats")
