from fastapi import APIRouter, Depends, HTTPException, Header
from sqlalchemy.orm import Session
from typing import Optional
import logging
import jwt

from database.connection import get_db
from database.repositories import UserRepository
from models.user import User, UserRole
from schemas.user import UserRegister, UserLogin, AuthResponse
from utils.access_policy import AccessDecision, authorize_room_write
from utils.auth import create_access_token, decode_access_token

router = APIRouter()
logger = logging.getLogger(__name__)


def get_current_user(authorization: Optional[str] = Header(None), db: Session = Depends(get_db)) -> User:
    """
    Dependency to verify the bearer token and return the authenticated user
    The actor's role is taken from the stored user, not from the token claims
    """
    if not authorization:
        raise HTTPException(status_code=401, detail="Authorization header missing")

    # Remove "Bearer " prefix if present
    token = authorization.replace("Bearer ", "").strip()

    try:
        payload = decode_access_token(token)
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token has expired - Please login again")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        user_id = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token subject")

    user = UserRepository(db).get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User not found")

    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if authorize_room_write(user.role) != AccessDecision.ALLOW:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


@router.post("/auth/register", response_model=AuthResponse)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    """
    Self-registration - new accounts always get the User role
    """
    users = UserRepository(db)
    if users.exists(payload.username, payload.email):
        raise HTTPException(status_code=400, detail="User with this email or username already exists")

    user = users.insert(User(
        username=payload.username,
        email=payload.email,
        password_hash=User.hash_password(payload.password),
        role=UserRole.USER,
    ))
    logger.info("Registered user %s (id=%s)", user.username, user.id)

    return {"token": create_access_token(user), "user": user}


@router.post("/auth/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """
    Login with email or username, returns a signed JWT
    """
    user = UserRepository(db).get_by_login(credentials.email_or_username)

    if not user or not user.verify_password(credentials.password):
        logger.info("Failed login for %s", credentials.email_or_username)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"token": create_access_token(user), "user": user}
