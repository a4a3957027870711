# crud/profile.py
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone, timedelta
from sqlalchemy.orm import Session
from passlib.context import CryptContext

from app.models.profile import Profile

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class ProfileCRUD:
    """CRUD operations for Profile model."""

    # =====================================================================
    # HELPER METHODS
    # =====================================================================

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def is_account_locked(user: Profile) -> bool:
        """Check if account is locked."""
        if user.lockout_until and _as_utc(user.lockout_until) > datetime.now(timezone.utc):
            return True
        return False

    @staticmethod
    def record_successful_login(db: Session, user: Profile) -> None:
        """Reset failed login attempts and stamp the login time."""
        user.failed_login_attempts = 0
        user.lockout_until = None
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()

    @staticmethod
    def increment_failed_attempts(
        db: Session, user: Profile, max_attempts: int = 5
    ) -> None:
        """Increment failed login attempts and lock account if needed."""
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1

        if user.failed_login_attempts >= max_attempts:
            # Lock account for 30 minutes
            user.lockout_until = datetime.now(timezone.utc) + timedelta(minutes=30)

        db.commit()

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(
        self, db: Session, *, email: str, password: str, display_name: Optional[str] = None
    ) -> Profile:
        """
        Create a new profile.

        Args:
            db: Database session
            email: Login email
            password: Plain password, hashed before storage
            display_name: Optional display name

        Returns:
            Created Profile instance
        """
        db_obj = Profile(
            email=email.lower(),
            password_hash=self.hash_password(password),
            display_name=display_name,
        )

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, id: UUID) -> Optional[Profile]:
        """Get profile by ID."""
        return db.query(Profile).filter(Profile.id == id).first()

    def get_by_email(self, db: Session, email: str) -> Optional[Profile]:
        """Get profile by email (case-insensitive)."""
        return db.query(Profile).filter(Profile.email == email.lower()).first()

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def update_display_name(
        self, db: Session, *, db_obj: Profile, display_name: str
    ) -> Profile:
        """
        Update the display name.

        Args:
            db: Database session
            db_obj: Existing Profile instance
            display_name: New, already validated display name

        Returns:
            Updated Profile instance
        """
        db_obj.display_name = display_name
        db_obj.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj


crud_profile = ProfileCRUD()
