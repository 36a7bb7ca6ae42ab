"""
Authentication routes for login and token management.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from ..database import get_db
from ..errors import AuthorizationError
from ..limiter import limiter
from ..models.user import User
from ..schemas.auth import UserLogin, UserResponse, TokenResponse, RefreshRequest
from ..auth import (
    authenticate,
    create_tokens,
    get_required_user,
    refresh_access_token,
)
from ..config import get_settings
from ..logging_config import api_logger

settings = get_settings()

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _login(db: Session, email: str, password: str) -> TokenResponse:
    user = authenticate(db, email, password)
    if not user:
        api_logger.warning("login failed", email=email)
        raise AuthorizationError("Invalid email or password")

    access_token, refresh_token = create_tokens(user.id)
    api_logger.info("login succeeded", user_id=user.id)
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.post("/login", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
def login(request: Request, form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    """Login with OAuth2 form (username/password)."""
    return _login(db, form_data.username, form_data.password)


@router.post("/login/json", response_model=TokenResponse)
@limiter.limit(settings.login_rate_limit)
def login_json(request: Request, credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with JSON body (email/password)."""
    return _login(db, credentials.email, credentials.password)


@router.post("/refresh", response_model=TokenResponse)
@limiter.limit("10/minute")
def refresh_tokens(request: Request, refresh_request: RefreshRequest, db: Session = Depends(get_db)):
    """Get new access and refresh tokens using a valid refresh token."""
    tokens = refresh_access_token(refresh_request.refresh_token, db)
    if not tokens:
        raise AuthorizationError("Invalid or expired refresh token")

    access_token, refresh_token = tokens
    return TokenResponse(access_token=access_token, refresh_token=refresh_token)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_required_user)):
    """Get current authenticated user."""
    return current_user
