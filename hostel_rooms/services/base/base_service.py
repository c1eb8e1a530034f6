"""
Base service class providing common functionality for all services.
"""

from contextlib import contextmanager
from typing import Generic, Iterator, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hostel_rooms.config.logging import get_logger
from hostel_rooms.core.exceptions import BaseAppException, DatabaseError
from hostel_rooms.repositories.base_repository import BaseRepository
from hostel_rooms.services.base.service_result import ServiceError, ServiceResult

TRepo = TypeVar("TRepo", bound=BaseRepository)


class BaseService(Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error reporting via ServiceResult
    - Transaction management with rollback on failure
    - Translation of unexpected database errors into DatabaseError
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(f"hostel_rooms.services.{self.__class__.__name__}")

    def _handle_exception(self, exc: BaseAppException, operation: str) -> ServiceResult:
        """
        Convert an application exception into a failed ServiceResult.

        Server-side failures are logged as errors; rejected requests
        (not found, invalid, conflicting) only as warnings.
        """
        log = self._logger.error if exc.status_code >= 500 else self._logger.warning
        log(
            f"{operation} failed: {exc.message}",
            extra={"operation": operation, "error_code": exc.error_code.value},
        )
        return ServiceResult.failure(ServiceError.from_exception(exc))

    @contextmanager
    def transaction(self, operation: str) -> Iterator[Session]:
        """
        Context manager for database transactions with automatic rollback.

        Application exceptions are re-raised unchanged; any other
        SQLAlchemy failure is logged and re-raised as DatabaseError.

        Example:
            with self.transaction("assign bed"):
                self.repository.occupy_bed(...)
        """
        try:
            yield self.db
            self.db.commit()
        except BaseAppException:
            self._rollback()
            raise
        except SQLAlchemyError as e:
            self._rollback()
            self._logger.error(f"Transaction failed during {operation}: {e}", exc_info=True)
            raise DatabaseError(f"Failed to {operation}", details={"error": str(e)}) from e
        except Exception:
            self._rollback()
            raise

    def _rollback(self) -> None:
        """Rollback the current transaction, suppressing rollback errors."""
        try:
            self.db.rollback()
        except SQLAlchemyError as e:
            # Rollback errors must not mask the original error
            self._logger.warning(f"Rollback failed: {e}")
