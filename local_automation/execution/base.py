"""
local_automation.execution.base — Contract every executor implements.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from local_automation.utils.errors import InvalidConfigError
from local_automation.utils.types import ExecutionResult, Task


class Executor(ABC):
    """A named capability that validates and executes Tasks addressed to it.

    ``execute`` may be awaited concurrently from independent callers as long
    as the executor keeps no mutable state beyond what it was built with.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier used to route tasks."""

    def validate(self, task: Task) -> None:
        if task.executor != self.name:
            raise InvalidConfigError(
                f"Wrong executor: expected '{self.name}', got '{task.executor}'"
            )

    @abstractmethod
    async def execute(self, task: Task) -> ExecutionResult:
        """Run the task. Must call ``validate`` first; failures are raised."""
