"""
Auth router - handles user registration, login and logout endpoints.
These are public endpoints (no authentication required).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password, create_access_token
from app.db.session import get_db
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.schemas.auth import UserRegister, UserLogin, Token
from app.schemas.user import UserOut

logger = logging.getLogger("chronos.routers.auth")

# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
# - prefix="/auth": All routes here will be under /auth (e.g., /auth/register)
# - tags=["auth"]: Groups these endpoints together in the OpenAPI docs
router = APIRouter(prefix="/auth", tags=["auth"])


# ---------------------------------------------------------------------------
# POST /auth/register - Create a new user account
# ---------------------------------------------------------------------------
@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Raises:
        400 Bad Request: If email is already registered
    """
    users = UserRepository(db)

    if users.get_by_email(payload.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    # Passwords are only ever stored as bcrypt hashes
    user = users.save(User(
        email=payload.email,
        hashed_password=hash_password(payload.password),
        display_name=payload.display_name,
    ))

    logger.info("User registered", extra={"user_id": str(user.id)})
    return user


# ---------------------------------------------------------------------------
# POST /auth/login - Authenticate and get a JWT token
# ---------------------------------------------------------------------------
@router.post("/login", response_model=Token)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    """
    Authenticate a user and return a JWT access token.

    Raises:
        401 Unauthorized: If email doesn't exist or password is wrong
        403 Forbidden: If the account is deactivated
    """
    user = UserRepository(db).get_by_email(payload.email)

    # Same message for unknown email and wrong password (no email enumeration)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is inactive",
        )

    return Token(access_token=create_access_token(subject=str(user.id)))


# ---------------------------------------------------------------------------
# POST /auth/logout - Drop the browser session cookie
# ---------------------------------------------------------------------------
@router.post("/logout")
def logout(response: Response):
    """
    Clear the "jwt" cookie used by browser clients.

    Tokens are stateless; a bearer token stays valid until it expires.
    """
    response.delete_cookie("jwt")
    return {"message": "logout successful"}
