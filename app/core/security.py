# app/core/security.py
from datetime import datetime, timedelta, timezone
from uuid import UUID

from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.core.config import settings, get_db
from app.crud.profile import crud_profile
from app.models.profile import Profile


# =====================================================================
# JWT TOKEN CONFIGURATION
# =====================================================================

security = HTTPBearer()


# =====================================================================
# TOKEN CREATION
# =====================================================================

def create_access_token(data: dict) -> str:
    """
    Create JWT access token.

    Args:
        data: Dictionary containing user data (typically {"sub": user_id})

    Returns:
        Encoded JWT access token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_refresh_token(data: dict) -> str:
    """
    Create JWT refresh token.

    Args:
        data: Dictionary containing user data (typically {"sub": user_id})

    Returns:
        Encoded JWT refresh token
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        days=settings.REFRESH_TOKEN_EXPIRE_DAYS
    )
    to_encode.update({"exp": expire, "type": "refresh"})
    return jwt.encode(to_encode, settings.REFRESH_SECRET_KEY, algorithm=settings.ALGORITHM)


# =====================================================================
# TOKEN VERIFICATION
# =====================================================================

def verify_token(token: str, secret_key: str, token_type: str = "access") -> str:
    """
    Verify JWT token and return user_id.

    Args:
        token: JWT token string
        secret_key: Secret key for decoding
        token_type: Type of token ("access" or "refresh")

    Returns:
        User ID from token

    Raises:
        HTTPException: If token is invalid or expired
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        payload = jwt.decode(token, secret_key, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise credentials_exception

    user_id = payload.get("sub")
    if user_id is None:
        raise credentials_exception

    if payload.get("type") != token_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token type. Expected {token_type}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user_id


def verify_access_token(token: str) -> str:
    """Verify access token and return the user ID."""
    return verify_token(token, settings.SECRET_KEY, "access")


def verify_refresh_token(token: str) -> str:
    """Verify refresh token and return the user ID."""
    return verify_token(token, settings.REFRESH_SECRET_KEY, "refresh")


def parse_user_id(user_id: str) -> UUID:
    try:
        return UUID(user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


# =====================================================================
# USER AUTHENTICATION DEPENDENCIES
# =====================================================================

def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db)
) -> Profile:
    """
    Get current authenticated user from JWT token.

    Args:
        credentials: HTTP Bearer credentials containing JWT token
        db: Database session

    Returns:
        Current authenticated Profile instance

    Raises:
        HTTPException: If token is invalid or user not found
    """
    user_id = parse_user_id(verify_access_token(credentials.credentials))

    user = crud_profile.get(db, id=user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is deactivated",
        )

    return user
