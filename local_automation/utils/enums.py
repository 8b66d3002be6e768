"""
local_automation.utils.enums — Enumerations shared across the package.
"""

from enum import Enum


class TaskStatus(Enum):
    """Lifecycle of a Task.

    Declared only: transitions (PENDING → RUNNING → COMPLETED | FAILED,
    PENDING → CANCELLED) belong to whatever orchestrates tasks, never to
    an executor.
    """

    PENDING = "Pending"
    RUNNING = "Running"
    COMPLETED = "Completed"
    FAILED = "Failed"
    CANCELLED = "Cancelled"


class ErrorKind(Enum):
    """Closed set of failure kinds shared by all executors."""

    IO = "io"
    SERIALIZATION = "serialization"
    TASK_NOT_FOUND = "task_not_found"
    PERMISSION_DENIED = "permission_denied"
    TIMEOUT = "timeout"  # reserved, nothing raises it yet
    INVALID_CONFIG = "invalid_config"
