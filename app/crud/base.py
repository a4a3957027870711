# crud/base.py
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar
from uuid import UUID
from datetime import datetime
from sqlalchemy.orm import Session

from app.core.config import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDUserRecord(Generic[ModelType]):
    """
    CRUD operations shared by every record kind owned by a single user.

    Every read and delete is scoped by ``user_id``; a record that belongs to
    another user behaves exactly like a missing one.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(self, db: Session, *, user_id: UUID, obj_in: Dict[str, Any]) -> ModelType:
        """
        Create a new record for a user.

        Args:
            db: Database session
            user_id: Owning user UUID
            obj_in: Column values

        Returns:
            Created model instance
        """
        db_obj = self.model(user_id=user_id, **obj_in)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get_for_user(self, db: Session, *, id: UUID, user_id: UUID) -> Optional[ModelType]:
        """
        Get a record by ID, only if it belongs to the user.

        Args:
            db: Database session
            id: Record UUID
            user_id: Owning user UUID

        Returns:
            Model instance or None
        """
        return (
            db.query(self.model)
            .filter(self.model.id == id, self.model.user_id == user_id)
            .first()
        )

    def list_by_user(
        self,
        db: Session,
        *,
        user_id: UUID,
        since: Optional[datetime] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[ModelType]:
        """
        Get a user's records ordered by creation time.

        Args:
            db: Database session
            user_id: Owning user UUID
            since: Optional lower bound on created_at (inclusive)
            descending: Newest first when True
            limit: Maximum number of records to return

        Returns:
            List of model instances
        """
        query = db.query(self.model).filter(self.model.user_id == user_id)
        if since is not None:
            query = query.filter(self.model.created_at >= since)

        order = self.model.created_at.desc() if descending else self.model.created_at.asc()
        query = query.order_by(order)

        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count_by_user(self, db: Session, *, user_id: UUID) -> int:
        """Count a user's records."""
        return db.query(self.model).filter(self.model.user_id == user_id).count()

    # =====================================================================
    # DELETE OPERATIONS
    # =====================================================================

    def delete(self, db: Session, *, db_obj: ModelType) -> ModelType:
        """Delete a single record."""
        db.delete(db_obj)
        db.commit()
        return db_obj

    def delete_by_user_id(self, db: Session, *, user_id: UUID) -> int:
        """
        Delete every record of this kind for a user.

        Returns:
            Number of deleted rows
        """
        deleted = (
            db.query(self.model)
            .filter(self.model.user_id == user_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted
