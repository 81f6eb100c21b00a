"""Error taxonomy shared by the repositories and the HTTP layer."""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(Enum):
    """Enumeration of all possible error codes."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    STORE_UNAVAILABLE = "store_unavailable"


class GymError(Exception):
    """Base exception for all gym backend errors."""

    code: ErrorCode = ErrorCode.VALIDATION_FAILED

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Code: {self.code.value}, Details: {self.details})"
        return f"{self.message} (Code: {self.code.value})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(GymError):
    """A referenced id does not exist."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity} not found",
            details={"entity": entity, "id": str(entity_id)},
        )
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(GymError):
    """Caller-supplied data failed a shape or range check."""

    code = ErrorCode.VALIDATION_FAILED


class TransientStoreError(GymError):
    """The backing store failed during a read or write."""

    code = ErrorCode.STORE_UNAVAILABLE
