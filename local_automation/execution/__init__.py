"""
local_automation.execution — Executor contract, sandboxed file executor, and registry.
"""

from local_automation.execution.base import Executor
from local_automation.execution.file_executor import FileExecutor
from local_automation.execution.registry import ExecutorRegistry

__all__ = ["Executor", "FileExecutor", "ExecutorRegistry"]
