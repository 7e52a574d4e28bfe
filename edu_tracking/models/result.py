"""
Result<T> pattern for store operations.

Profile store operations report expected failures (unknown student,
invalid record, failed save) through a Result instead of raising, so
callers can display the message and keep going.
"""

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar
from enum import Enum


T = TypeVar('T')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class Result(Generic[T]):
    """
    Outcome of an operation that may succeed or fail.

    Attributes:
        status: Result status (SUCCESS or FAILURE)
        value: The result value if successful (None if failure)
        error: The exception that caused failure, if any
        message: Optional message describing the result
        details: Individual problems behind a failure (e.g. validation errors)

    Examples:
        >>> result = store.add_student("Nguyễn Văn An", "Lớp 5", 140000, [])
        >>> if result.is_success:
        ...     print(result.value.id)
        >>> else:
        ...     print(result.message)
    """

    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None
    message: Optional[str] = None
    details: List[str] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(cls, value: T, message: Optional[str] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            value: The result value
            message: Optional success message

        Returns:
            Result instance with SUCCESS status
        """
        return cls(
            status=ResultStatus.SUCCESS,
            value=value,
            message=message
        )

    @classmethod
    def failure(
        cls,
        message: str,
        error: Optional[Exception] = None,
        details: Optional[List[str]] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: Error message describing the failure
            error: Optional exception that caused the failure
            details: Optional list of individual problems

        Returns:
            Result instance with FAILURE status
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            error=error,
            details=list(details or [])
        )

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Returns:
            The result value if successful

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(
                f"Cannot unwrap failure result: {self.message}"
            )
        return self.value

    def unwrap_or(self, default: T) -> T:
        """
        Unwrap the result value or return a default.

        Args:
            default: Default value to return if result is failure

        Returns:
            The result value if successful, otherwise the default
        """
        return self.value if self.is_success else default
