"""
Common result schemas.
"""

from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from fibretrack.domain.value_objects.failure_kind import FailureKind

T = TypeVar("T")

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


class OperationResult(BaseModel, Generic[T]):
    """Uniform envelope returned by every workflow operation."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool = True
    data: Optional[Any] = None
    message: Optional[str] = None
    error_type: Optional[FailureKind] = None

    @classmethod
    def ok(cls, data: Any = None, message: Optional[str] = None) -> "OperationResult":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(
        cls, message: str, error_type: FailureKind, data: Any = None
    ) -> "OperationResult":
        return cls(success=False, message=message, error_type=error_type, data=data)

    @classmethod
    def not_found(cls, entity: str) -> "OperationResult":
        return cls.fail(f"{entity} not found", FailureKind.NOT_FOUND)

    @classmethod
    def fault(cls) -> "OperationResult":
        return cls.fail(GENERIC_ERROR_MESSAGE, FailureKind.TRANSPORT_FAULT)
