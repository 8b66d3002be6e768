"""
local_automation.utils.types — Core records passed between callers and executors.
"""

from __future__ import annotations

import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from local_automation.utils.enums import TaskStatus

TaskId = str
_KEEP = object()


def _uid() -> TaskId:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _ts(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_ts(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


# ── Task ─────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Task:
    """One unit of work addressed to a named executor.

    Only ``executor``, ``operation`` and ``params`` are caller-supplied;
    ``id`` and ``created_at`` are fixed at construction and never change.
    Immutability is shallow: ``params`` is held as given, not copied.
    """

    executor: str
    operation: str
    params: Any = field(default_factory=dict)
    id: TaskId = field(default_factory=_uid)
    status: TaskStatus = TaskStatus.PENDING
    created_at: datetime = field(default_factory=_now)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    def with_status(
        self,
        status: TaskStatus,
        started_at: Any = _KEEP,
        completed_at: Any = _KEEP,
    ) -> "Task":
        """Copy of this task in a new status. Identity and creation time carry over.

        Omitted timestamps keep their current value; pass None to clear one.
        """
        return dataclasses.replace(
            self,
            status=status,
            started_at=self.started_at if started_at is _KEEP else started_at,
            completed_at=self.completed_at if completed_at is _KEEP else completed_at,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "executor": self.executor,
            "operation": self.operation,
            "params": self.params,
            "status": self.status.value,
            "created_at": _ts(self.created_at),
            "started_at": _ts(self.started_at),
            "completed_at": _ts(self.completed_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        return cls(
            executor=data["executor"],
            operation=data["operation"],
            params=data.get("params"),
            id=data.get("id") or _uid(),
            status=TaskStatus(data.get("status", TaskStatus.PENDING.value)),
            created_at=_parse_ts(data.get("created_at")) or _now(),
            started_at=_parse_ts(data.get("started_at")),
            completed_at=_parse_ts(data.get("completed_at")),
        )


# ── Execution Result ─────────────────────────────────────────────────────────


@dataclass
class ExecutionResult:
    """Outcome of one executor invocation.

    Hard failures are raised as AutomationError, not reported here, so every
    result an executor returns today has ``success=True``.
    """

    success: bool
    output: Any = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, output: Any = None) -> "ExecutionResult":
        return cls(success=True, output=output, error=None)

    def to_dict(self) -> dict:
        return {"success": self.success, "output": self.output, "error": self.error}
