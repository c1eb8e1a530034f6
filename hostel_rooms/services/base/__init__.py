from hostel_rooms.services.base.base_service import BaseService
from hostel_rooms.services.base.service_result import ServiceError, ServiceResult

__all__ = ["BaseService", "ServiceError", "ServiceResult"]
