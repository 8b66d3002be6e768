"""
local_automation.utils — Shared records, errors, enums and configuration.
"""

from local_automation.utils.enums import ErrorKind, TaskStatus
from local_automation.utils.errors import (
    AutomationError,
    ExecutionTimeoutError,
    InvalidConfigError,
    IoError,
    PermissionDeniedError,
    SerializationError,
    TaskNotFoundError,
)
from local_automation.utils.types import ExecutionResult, Task, TaskId
from local_automation.utils.config import AutomationConfig

__all__ = [
    "ErrorKind",
    "TaskStatus",
    "AutomationError",
    "ExecutionTimeoutError",
    "InvalidConfigError",
    "IoError",
    "PermissionDeniedError",
    "SerializationError",
    "TaskNotFoundError",
    "ExecutionResult",
    "Task",
    "TaskId",
    "AutomationConfig",
]
