import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.auth.models import User
from app.auth.schemas import UserCreate, UserOut, LoginRequest, TokenResponse
from app.auth.service import handle_login, handle_signup, get_current_user

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User created successfully"},
        400: {"description": "User already exists or validation error"},
        500: {"description": "Signup failed"},
    },
)
def signup_route(
    user: UserCreate,
    db: Session = Depends(get_db),
) -> TokenResponse:
    try:
        return handle_signup(user, db)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Signup failed: {e}")
        raise HTTPException(status_code=500, detail="Signup failed")


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login and receive an access token",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
        500: {"description": "Server error"},
    },
)
def login_route(
    user: LoginRequest,
    db: Session = Depends(get_db),
) -> TokenResponse:
    try:
        return handle_login(user, db)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Login failed: {e}")
        raise HTTPException(status_code=500, detail="Login failed")


@router.get(
    "/me",
    response_model=UserOut,
    summary="Get current user",
    responses={
        200: {"description": "User returned"},
        401: {"description": "Unauthorized"},
    },
)
def get_me_route(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.model_validate(user)
