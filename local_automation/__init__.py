"""
local_automation — Task dispatch to sandboxed local executors.
"""

from local_automation.execution import Executor, ExecutorRegistry, FileExecutor
from local_automation.utils import (
    AutomationError,
    ExecutionResult,
    Task,
    TaskStatus,
)

__version__ = "0.1.0"

__all__ = [
    "Executor",
    "ExecutorRegistry",
    "FileExecutor",
    "AutomationError",
    "ExecutionResult",
    "Task",
    "TaskStatus",
]
