"""
local_automation.execution.registry — Routes tasks to executors by name.
"""

from __future__ import annotations

import logging
from typing import Optional

from local_automation.execution.base import Executor
from local_automation.execution.file_executor import FileExecutor
from local_automation.utils.config import AutomationConfig
from local_automation.utils.errors import InvalidConfigError
from local_automation.utils.types import ExecutionResult, Task

logger = logging.getLogger(__name__)


class ExecutorRegistry:
    """Name → executor map with single-task dispatch."""

    def __init__(self):
        self.executors: dict[str, Executor] = {}

    @classmethod
    def from_config(cls, config: AutomationConfig) -> "ExecutorRegistry":
        registry = cls()
        registry.register(
            FileExecutor(
                config.execution.base_path,
                strict_sandbox=config.execution.strict_sandbox,
            )
        )
        return registry

    def register(self, executor: Executor):
        if executor.name in self.executors:
            logger.warning("Replacing executor '%s'", executor.name)
        self.executors[executor.name] = executor

    def unregister(self, name: str):
        self.executors.pop(name, None)

    def get(self, name: str) -> Optional[Executor]:
        return self.executors.get(name)

    def names(self) -> list[str]:
        return list(self.executors.keys())

    async def dispatch(self, task: Task) -> ExecutionResult:
        """Hand ``task`` to the executor it names; errors propagate unchanged."""
        executor = self.executors.get(task.executor)
        if executor is None:
            raise InvalidConfigError(f"No executor registered for '{task.executor}'")
        return await executor.execute(task)
