# services/profile.py
import logging
from uuid import UUID
from sqlalchemy.orm import Session
from fastapi import HTTPException, status

from app.core.exceptions import ConflictError, NotFoundError, UnauthorizedError
from app.core.result import Result
from app.crud.profile import crud_profile
from app.models.profile import Profile
from app.schemas.profile import LoginRequest, ProfileUpdate, RegisterRequest
from app.services.record_store import record_store

logger = logging.getLogger(__name__)


# =====================================================================
# EXCEPTIONS
# =====================================================================

class AccountLockedError(HTTPException):
    """Account locked exception."""

    def __init__(self, detail: str = "Account is locked"):
        super().__init__(status_code=status.HTTP_423_LOCKED, detail=detail)


# =====================================================================
# SERVICE CLASS
# =====================================================================

class ProfileService:
    """Service layer for sign-up, sign-in and profile settings."""

    def __init__(self):
        self.crud = crud_profile

    # =====================================================================
    # REGISTRATION & LOGIN
    # =====================================================================

    def register(self, db: Session, data: RegisterRequest) -> Profile:
        """
        Create a new account.

        Raises:
            ConflictError: If the email is already registered
        """
        if self.crud.get_by_email(db, email=data.email):
            raise ConflictError("Email already registered", notice="An account with this email already exists.")

        display_name = data.display_name.strip() if data.display_name else None
        user = record_store.write(
            db,
            "create profile",
            lambda: self.crud.create(
                db, email=data.email, password=data.password, display_name=display_name
            ),
        ).unwrap()
        logger.info(f"Registered profile {user.id}")
        return user

    def authenticate(self, db: Session, login_data: LoginRequest) -> Profile:
        """
        Authenticate user with email and password.

        Raises:
            UnauthorizedError: If credentials are invalid or the account is inactive
            AccountLockedError: If the account is locked after repeated failures
        """
        user = self.crud.get_by_email(db, email=login_data.email)
        if not user:
            raise UnauthorizedError("Invalid email or password", notice="Invalid email or password.")

        if self.crud.is_account_locked(user):
            raise AccountLockedError(detail=f"Account is locked until {user.lockout_until}")

        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")

        if not self.crud.verify_password(login_data.password, user.password_hash):
            self.crud.increment_failed_attempts(db, user)
            logger.warning(f"Failed login for profile {user.id} ({user.failed_login_attempts} attempts)")
            raise UnauthorizedError("Invalid email or password", notice="Invalid email or password.")

        self.crud.record_successful_login(db, user)
        return user

    def get_by_id(self, db: Session, user_id: UUID) -> Profile:
        user = self.crud.get(db, id=user_id)
        if not user or not user.is_active:
            raise UnauthorizedError("User not found")
        return user

    # =====================================================================
    # PROFILE SETTINGS
    # =====================================================================

    def update_profile(self, db: Session, user: Profile, data: ProfileUpdate) -> Profile:
        result: Result[Profile] = record_store.write(
            db,
            "update profile",
            lambda: self.crud.update_display_name(db, db_obj=user, display_name=data.display_name),
        )
        return result.unwrap()

    def get_profile(self, db: Session, user_id: UUID) -> Profile:
        user = self.crud.get(db, id=user_id)
        if not user:
            raise NotFoundError("Profile not found")
        return user


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

profile_service = ProfileService()
