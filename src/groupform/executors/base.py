"""
Base executor class for workspace resource operations.

Provides common functionality for all executors including error handling,
retries on transient failures, and dry-run support.
"""

import logging
import os
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from databricks.sdk import WorkspaceClient
from databricks.sdk.errors import (
    AlreadyExists,
    BadRequest,
    InternalError,
    InvalidParameterValue,
    NotFound,
    NotImplemented,
    PermissionDenied,
    ResourceAlreadyExists,
    ResourceConflict,
    ResourceDoesNotExist,
    ResourceExhausted,
    TemporarilyUnavailable,
    Unauthenticated,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')  # Generic type for models

DEFAULT_MAX_RETRIES = max(1, int(os.getenv('GROUPFORM_MAX_RETRIES', '3')))


class OperationType(str, Enum):
    """Types of operations that can be performed."""
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    NO_OP = "NO_OP"
    SKIPPED = "SKIPPED"


@dataclass
class ExecutionResult:
    """Result of an execution operation."""

    success: bool
    operation: OperationType
    resource_type: str
    resource_name: str
    message: str = ""
    error: Optional[Exception] = None
    duration_seconds: float = 0.0
    changes: Dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        status = "OK" if self.success else "FAILED"
        return (
            f"[{status}] {self.operation.value} {self.resource_type} "
            f"{self.resource_name}: {self.message}"
        )


class BaseExecutor(ABC, Generic[T]):
    """
    Base class for all executors.

    Provides common functionality including:
    - Error handling and retries
    - Dry-run mode support
    - Execution summary
    """

    def __init__(
        self,
        client: WorkspaceClient,
        dry_run: bool = False,
        max_retries: int = DEFAULT_MAX_RETRIES,
        continue_on_error: bool = False,
    ):
        """
        Initialize the executor.

        Args:
            client: Databricks SDK client
            dry_run: If True, only report what would be done
            max_retries: Maximum attempts for transient failures (at least one)
            continue_on_error: Return failed results instead of raising
        """
        self.client = client
        self.dry_run = dry_run
        self.max_retries = max(1, max_retries)
        self.continue_on_error = continue_on_error
        self.results: List[ExecutionResult] = []

    @abstractmethod
    def create(self, resource: T) -> ExecutionResult:
        """Create a new resource."""
        pass

    @abstractmethod
    def update(self, resource: T) -> ExecutionResult:
        """Update an existing resource in place."""
        pass

    @abstractmethod
    def delete(self, resource: T) -> ExecutionResult:
        """Delete a resource."""
        pass

    @abstractmethod
    def exists(self, resource: T) -> bool:
        """Check if a resource exists."""
        pass

    @abstractmethod
    def get_resource_type(self) -> str:
        """Get the type of resource this executor handles."""
        pass

    def execute_with_retry(self, operation: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """
        Execute an operation, retrying transient failures with exponential backoff.

        Args:
            operation: The operation to execute
            *args: Positional arguments for the operation
            **kwargs: Keyword arguments for the operation

        Returns:
            Result of the operation

        Raises:
            Exception: The last transient error if all attempts fail, or the
                first non-transient error
        """
        last_error = None

        for attempt in range(self.max_retries):
            try:
                return operation(*args, **kwargs)
            except (ResourceDoesNotExist, ResourceAlreadyExists, PermissionDenied,
                    InvalidParameterValue, NotFound, AlreadyExists, BadRequest,
                    Unauthenticated, NotImplemented, ResourceConflict):
                raise
            except (TemporarilyUnavailable, InternalError, ResourceExhausted) as e:
                last_error = e
                if attempt < self.max_retries - 1:
                    wait_time = 2 ** attempt
                    logger.warning(
                        f"Attempt {attempt + 1} failed: {e}. "
                        f"Retrying in {wait_time} seconds..."
                    )
                    time.sleep(wait_time)
                else:
                    logger.error(f"All {self.max_retries} attempts failed")

        if last_error:
            raise last_error

    def _handle_error(
        self,
        operation: OperationType,
        resource_name: str,
        error: Exception
    ) -> ExecutionResult:
        """
        Record a failed operation and re-raise unless continue_on_error is set.

        Args:
            operation: The operation that failed
            resource_name: Name of the resource
            error: The exception that occurred

        Returns:
            ExecutionResult with error details
        """
        if isinstance(error, PermissionDenied):
            message = f"Permission denied: {error}. Check that the caller is a workspace admin."
        elif isinstance(error, (ResourceDoesNotExist, NotFound)):
            message = f"Resource not found: {error}"
        elif isinstance(error, (ResourceAlreadyExists, AlreadyExists, ResourceConflict)):
            message = f"Resource already exists: {error}"
        elif isinstance(error, (InvalidParameterValue, BadRequest)):
            message = f"Invalid parameter: {error}"
        elif isinstance(error, Unauthenticated):
            message = f"Authentication failed: {error}. Check credentials and workspace URL."
        elif isinstance(error, TemporarilyUnavailable):
            message = f"Service temporarily unavailable: {error}. Try again later."
        elif isinstance(error, ResourceExhausted):
            message = f"Resource limit exceeded: {error}"
        else:
            message = str(error)

        result = ExecutionResult(
            success=False,
            operation=operation,
            resource_type=self.get_resource_type(),
            resource_name=resource_name,
            message=message,
            error=error
        )

        self.results.append(result)
        logger.error(f"Operation failed: {result}")

        if not self.continue_on_error:
            raise error

        return result

    def _record(self, result: ExecutionResult) -> ExecutionResult:
        self.results.append(result)
        logger.info(str(result))
        return result

    def get_summary(self) -> str:
        """
        Get a summary of execution results.

        Returns:
            Summary string
        """
        if not self.results:
            return "No operations performed"

        successful = sum(1 for r in self.results if r.success)
        failed = sum(1 for r in self.results if not r.success)

        lines = [
            "Execution Summary:",
            f"  Total operations: {len(self.results)}",
            f"  Successful: {successful}",
            f"  Failed: {failed}"
        ]

        if failed > 0:
            lines.append("\nFailed operations:")
            for result in self.results:
                if not result.success:
                    lines.append(f"  - {result}")

        return "\n".join(lines)

    @staticmethod
    def _start_timer() -> float:
        return time.time()

    @staticmethod
    def _elapsed(start_time: float) -> float:
        return time.time() - start_time
