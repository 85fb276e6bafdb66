"""Domain Service base classes following DDD patterns.

Each domain service encapsulates a single admin operation (create, edit,
delete or load an exercise) behind a clean async ``call`` interface.
"""

from __future__ import annotations

import functools
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

# Generic type variables for request and response
T = TypeVar("T")  # Request type
U = TypeVar("U")  # Response type


class DomainService(ABC, Generic[T, U]):
    """Base class for all domain services.

    Each domain service should:
    - Use Verb + Noun naming (e.g., CreateExercise, DeleteExercise)
    - Expose only a single `call` method as the primary operation
    - Support async/await, since every store access is a round trip

    Example:
        ```python
        class DeleteExercise(DomainService[DeleteExerciseRequest, FormResult]):
            async def call(self, request: DeleteExerciseRequest) -> FormResult:
                await self._require_admin(request.caller_code)
                await self.repository.delete(request.exercise_id)
                return FormResult.ok("Success", "Exercise deleted successfully")
        ```
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    async def call(self, request: T) -> U:
        """Single entry point for domain service execution.

        Args:
            request: Typed request object containing all necessary data

        Returns:
            Typed response object with operation results

        Raises:
            DomainServiceError: When business rules are violated
            ValidationError: When request data is invalid
        """
        pass


class DomainServiceError(Exception):
    """Base exception for domain service errors."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        """Initialize domain service error.

        Args:
            message: Human-readable error message
            error_code: Optional machine-readable error code
        """
        super().__init__(message)
        self.error_code = error_code


class ValidationError(DomainServiceError):
    """Exception for request validation errors.

    Raised when a required form field is missing or empty.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, "VALIDATION_ERROR")
        self.field = field


class PermissionDeniedError(DomainServiceError):
    """Exception raised when the caller fails the admin check."""

    def __init__(self, message: str = "Admin access required") -> None:
        super().__init__(message, "PERMISSION_DENIED")


# Utility decorators for domain services


def log_domain_operation(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to log domain service operations.

    Logs the start and completion of domain service calls
    with their duration.
    """

    @functools.wraps(func)
    async def wrapper(self: Any, request: Any) -> Any:
        operation_name = f"{self.__class__.__name__}.call"
        self.logger.info(f"Starting {operation_name}")

        start_time = time.time()
        try:
            result = await func(self, request)
            duration = time.time() - start_time
            self.logger.info(f"Completed {operation_name} in {duration:.3f}s")
            return result
        except Exception as e:
            duration = time.time() - start_time
            self.logger.error(f"Failed {operation_name} after {duration:.3f}s: {e}")
            raise

    return wrapper

