"""
Executor modules for applying resources to a workspace via the SDK.
"""

from .base import BaseExecutor, ExecutionResult, OperationType
from .group_executor import GroupExecutor

__all__ = [
    "BaseExecutor",
    "ExecutionResult",
    "OperationType",
    "GroupExecutor",
]
