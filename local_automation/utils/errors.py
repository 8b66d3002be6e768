"""
local_automation.utils.errors — Error taxonomy raised by executors.

Failures are raised where they happen and propagate to the caller as-is.
Nothing here is retried or turned into a soft ``success=False`` result.
"""

from __future__ import annotations

from local_automation.utils.enums import ErrorKind


class AutomationError(Exception):
    """Base class for every typed failure."""

    kind: ErrorKind
    prefix: str = ""

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__(f"{self.prefix}: {detail}" if detail else self.prefix)


class IoError(AutomationError):
    """Underlying filesystem or stream failure."""

    kind = ErrorKind.IO
    prefix = "IO error"


class SerializationError(AutomationError):
    """Structured value could not be encoded or decoded."""

    kind = ErrorKind.SERIALIZATION
    prefix = "Serialization error"


class TaskNotFoundError(AutomationError):
    kind = ErrorKind.TASK_NOT_FOUND
    prefix = "Task not found"


class PermissionDeniedError(AutomationError):
    """Sandbox violation."""

    kind = ErrorKind.PERMISSION_DENIED
    prefix = "Permission denied"


class ExecutionTimeoutError(AutomationError):
    kind = ErrorKind.TIMEOUT
    prefix = "Execution timeout"

    def __init__(self):
        super().__init__()


class InvalidConfigError(AutomationError):
    """Wrong executor addressed, unknown operation, or malformed params."""

    kind = ErrorKind.INVALID_CONFIG
    prefix = "Invalid configuration"
