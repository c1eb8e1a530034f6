from hostel_rooms.schemas.common.base import BaseSchema, OperationResult, PaginationInfo

__all__ = ["BaseSchema", "OperationResult", "PaginationInfo"]
