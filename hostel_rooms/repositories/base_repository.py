# hostel_rooms/repositories/base_repository.py
"""
Base repository with the operations shared by every repository.
"""

from typing import Generic, List, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from hostel_rooms.models.base import BaseModel

T = TypeVar('T', bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository providing common database operations.

    Repositories never commit; the calling service owns the transaction.
    """

    def __init__(self, model: Type[T], session: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Database session
        """
        self.model = model
        self.session = session

    def add_all(self, entities: List[T], flush: bool = True) -> List[T]:
        """Stage several already-built entities in one go."""
        self.session.add_all(entities)
        if flush:
            self.session.flush()
        return entities

    def count(self) -> int:
        """Total number of rows for the model."""
        query = select(func.count()).select_from(self.model)
        return self.session.execute(query).scalar_one()
