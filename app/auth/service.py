import logging
from fastapi import HTTPException, Depends
from sqlalchemy.orm import Session
from uuid import UUID
from datetime import datetime, timedelta, timezone
from jose import jwt, JWTError
from passlib.context import CryptContext
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from app.core.database import get_db
from app.auth.models import User
from app.auth.schemas import UserCreate, LoginRequest, UserOut, TokenResponse
from app.core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

# Initialize logger and security tools
logger = logging.getLogger(__name__)
pwd = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer = HTTPBearer()


def hash_password(password: str) -> str:
    """
    Hashes a plaintext password using bcrypt.

    Args:
        password (str): Raw password input.

    Returns:
        str: Bcrypt-hashed password.
    """
    return pwd.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd.verify(plain_password, hashed_password)


def create_token(user_id: UUID, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    expires_delta = expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: str) -> dict:
    """
    Decodes and validates a JWT token.

    Raises:
        HTTPException: If token is invalid or expired.
    """
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired authentication token")


def get_current_user_id(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
) -> UUID:
    """
    Extracts the user ID from the JWT token.

    Raises:
        HTTPException: If token is invalid or missing required claims.
    """
    payload = decode_token(creds.credentials)
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing subject field")
    try:
        return UUID(user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid user ID in token")


def get_current_user(
    creds: HTTPAuthorizationCredentials = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    """
    Fetches the full user object from the database using token credentials.

    Raises:
        HTTPException: If user not found.
    """
    user_id = get_current_user_id(creds)
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user


def handle_login(req: LoginRequest, db: Session) -> TokenResponse:
    """
    Handles login via email and password.

    Args:
        req (LoginRequest): Email and password credentials.
        db (Session): DB session.

    Returns:
        TokenResponse: JWT token and user object.
    """
    email = req.email.lower().strip()
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(req.password, user.password):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    logger.info("Password login for user %s", user.id)
    return TokenResponse(access_token=create_token(user.id), user=UserOut.model_validate(user))


def handle_signup(req: UserCreate, db: Session) -> TokenResponse:
    """
    Handles user signup using email and password.

    Args:
        req (UserCreate): Signup request data.
        db (Session): DB session.

    Returns:
        TokenResponse: JWT token and the created user.
    """
    email = req.email.lower().strip()
    if not req.password:
        raise HTTPException(status_code=400, detail="Password required")
    if db.query(User).filter(User.email == email).first():
        raise HTTPException(status_code=400, detail="User already exists")

    user = User(
        email=email,
        name=req.name,
        password=hash_password(req.password),
        trusted_email=(req.trusted_email or "").strip() or None,
        trusted_phone=(req.trusted_phone or "").strip() or None,
        photo_url=req.photo_url,
    )
    db.add(user); db.commit(); db.refresh(user)

    logger.info("Created user %s (trusted contact=%s)", user.id, bool(user.trusted_email))
    return TokenResponse(access_token=create_token(user.id), user=UserOut.model_validate(user))
