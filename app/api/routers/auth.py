# app/api/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import (
    create_access_token,
    create_refresh_token,
    get_current_user,
    parse_user_id,
    verify_refresh_token,
)
from app.services.profile import profile_service
from app.models.profile import Profile
from app.schemas.profile import (
    LoginRequest,
    ProfileOut,
    RefreshTokenRequest,
    RegisterRequest,
    TokenResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _token_response(user: Profile) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(data={"sub": str(user.id)}),
        refresh_token=create_refresh_token(data={"sub": str(user.id)}),
        user=ProfileOut.model_validate(user),
    )


# =====================================================================
# PUBLIC ENDPOINTS - No authentication required
# =====================================================================

@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account"
)
def register(
    data: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Create a new account and sign in.

    - **email**: Valid email address (required)
    - **password**: At least 8 characters with a letter and a digit (required)
    - **display_name**: Optional name shown in the app
    """
    user = profile_service.register(db, data)
    return _token_response(user)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login to get access token"
)
def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    Authenticate user and receive access and refresh tokens.

    **Note**: Account will be locked for 30 minutes after 5 failed attempts.
    """
    user = profile_service.authenticate(db, login_data)
    return _token_response(user)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token"
)
def refresh_token(
    refresh_data: RefreshTokenRequest,
    db: Session = Depends(get_db)
):
    """Get a new token pair using a refresh token."""
    user_id = verify_refresh_token(refresh_data.refresh_token)
    user = profile_service.get_by_id(db, user_id=parse_user_id(user_id))
    return _token_response(user)


# =====================================================================
# USER ENDPOINTS - Authentication required
# =====================================================================

@router.get(
    "/me",
    response_model=ProfileOut,
    summary="Get current user"
)
def get_me(current_user: Profile = Depends(get_current_user)):
    return current_user
