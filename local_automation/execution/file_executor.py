"""
local_automation.execution.file_executor — Filesystem executor confined to a sandbox root.

Handles: read, write, delete, copy, move, list, create_dir, exists, and the
JSON / CSV read-write pairs. Every path goes through ``resolve_path`` before
any filesystem call, and blocking calls run in the default thread pool.
"""

from __future__ import annotations

import asyncio
import csv
import io
import json
import logging
import os
import shutil
import sys
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, Union

from local_automation.execution.base import Executor
from local_automation.execution.params import (
    PathParams,
    TransferParams,
    WriteCsvParams,
    WriteJsonParams,
    WriteParams,
    decode_params,
)
from local_automation.utils.errors import (
    AutomationError,
    InvalidConfigError,
    IoError,
    PermissionDeniedError,
    SerializationError,
)
from local_automation.utils.types import ExecutionResult, Task

logger = logging.getLogger(__name__)

Handler = Callable[[Any], Awaitable[ExecutionResult]]

# No per-field cap; the limit must still fit in a C long.
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


async def _run_io(fn: Callable[..., Any], *args: Any) -> Any:
    """Run a blocking filesystem call off the event loop, mapping OS failures to IoError."""
    try:
        return await asyncio.get_event_loop().run_in_executor(None, fn, *args)
    except (OSError, ValueError) as e:
        raise IoError(str(e)) from e


# ── Blocking workers (run in the thread pool) ────────────────────────────────


def _read_text(path: Path) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: Path, content: str):
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _copy_file(src: Path, dest: Path):
    shutil.copyfile(src, dest)
    shutil.copymode(src, dest)


def _list_names(path: Path) -> list[str]:
    with os.scandir(path) as entries:
        return [entry.name for entry in entries]


def _make_dirs(path: Path):
    path.mkdir(parents=True, exist_ok=True)


# ── CSV / JSON helpers ───────────────────────────────────────────────────────


def _check_field_counts(records: list[list[str]]):
    expected = None
    for record in records:
        if expected is None:
            expected = len(record)
        elif len(record) != expected:
            raise IoError(
                f"CSV error: found record with {len(record)} fields, "
                f"but the previous record has {expected} fields"
            )


def _parse_csv(text: str) -> tuple[list[str], list[list[str]]]:
    try:
        records = [r for r in csv.reader(io.StringIO(text)) if r]
    except csv.Error as e:
        raise IoError(f"CSV error: {e}") from e
    _check_field_counts(records)
    if not records:
        return [], []
    return records[0], records[1:]


def _reject_constant(name: str):
    raise ValueError(f"invalid number: {name}")


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise SerializationError(str(e)) from e


def _render_json(data: Any) -> str:
    try:
        return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError, RecursionError) as e:
        raise SerializationError(str(e)) from e


def _render_csv(headers: list[str], rows: list[list[str]]) -> bytes:
    _check_field_counts([headers, *rows])
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buf.getvalue().encode("utf-8")


class FileExecutor(Executor):
    """Executes ``file`` tasks inside ``base_path``.

    Sandbox check (``resolve_path``):
      1. Raw input containing '..' anywhere → PermissionDeniedError
      2. Join onto base_path (an absolute input replaces the base)
      3. strict_sandbox only: canonical form must stay under base_path

    Without strict_sandbox the check is purely lexical: absolute paths and
    symlinks inside the root can still reach outside it.
    """

    NAME = "file"

    def __init__(self, base_path: Union[str, Path], strict_sandbox: bool = False):
        self.base_path = Path(base_path)
        self.strict_sandbox = strict_sandbox

        self._operations: dict[str, tuple[type, Handler]] = {
            "read": (PathParams, self._op_read),
            "read_csv": (PathParams, self._op_read_csv),
            "read_json": (PathParams, self._op_read_json),
            "write": (WriteParams, self._op_write),
            "delete": (PathParams, self._op_delete),
            "move": (TransferParams, self._op_move),
            "copy": (TransferParams, self._op_copy),
            "list": (PathParams, self._op_list),
            "write_json": (WriteJsonParams, self._op_write_json),
            "write_csv": (WriteCsvParams, self._op_write_csv),
            "create_dir": (PathParams, self._op_create_dir),
            "exists": (PathParams, self._op_exists),
        }

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def operations(self) -> list[str]:
        return list(self._operations)

    def resolve_path(self, path: str) -> Path:
        """Join ``path`` onto the sandbox root. Raises PermissionDeniedError on escape."""
        if ".." in path:
            raise PermissionDeniedError("Path traversal not allowed")

        full_path = self.base_path / path

        if self.strict_sandbox:
            root = self.base_path.resolve()
            try:
                full_path.resolve(strict=False).relative_to(root)
            except ValueError:
                raise PermissionDeniedError(
                    f"Path {path} is outside sandbox root {root}"
                ) from None

        return full_path

    async def execute(self, task: Task) -> ExecutionResult:
        start = time.time()
        log_extra = {"task_id": task.id, "executor": task.executor, "operation": task.operation}
        try:
            self.validate(task)
            entry = self._operations.get(task.operation)
            if entry is None:
                raise InvalidConfigError(f"Unknown operation: {task.operation}")

            params_cls, handler = entry
            logger.debug("Dispatching %s.%s", self.name, task.operation, extra=log_extra)
            params = decode_params(params_cls, task.params)
            result = await handler(params)
        except AutomationError as e:
            logger.warning(
                "Execution %s.%s failed: %s", self.name, task.operation, e, extra=log_extra
            )
            raise

        logger.info(
            "Execution %s.%s: success (%.0fms)",
            self.name,
            task.operation,
            (time.time() - start) * 1000,
            extra=log_extra,
        )
        return result

    # ── Read Operations ──────────────────────────────────────────────────

    async def _op_read(self, params: PathParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        content = await _run_io(_read_text, path)
        return ExecutionResult.ok({"content": content})

    async def _op_read_json(self, params: PathParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        content = await _run_io(_read_text, path)
        return ExecutionResult.ok(_parse_json(content))

    async def _op_read_csv(self, params: PathParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        content = await _run_io(_read_text, path)
        headers, rows = _parse_csv(content)
        return ExecutionResult.ok({"headers": headers, "rows": rows})

    async def _op_list(self, params: PathParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        files = await _run_io(_list_names, path)
        return ExecutionResult.ok({"files": files})

    async def _op_exists(self, params: PathParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        exists = await _run_io(path.exists)
        return ExecutionResult.ok({"exists": exists})

    # ── Write Operations ─────────────────────────────────────────────────

    async def _op_write(self, params: WriteParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        await _run_io(_write_text, path, params.content)
        return ExecutionResult.ok({"path": str(path)})

    async def _op_write_json(self, params: WriteJsonParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        text = _render_json(params.data)
        await _run_io(_write_text, path, text)
        return ExecutionResult.ok({"path": str(path)})

    async def _op_write_csv(self, params: WriteCsvParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        data = _render_csv(params.headers, params.rows)
        await _run_io(path.write_bytes, data)
        return ExecutionResult.ok({"path": str(path)})

    async def _op_create_dir(self, params: PathParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        await _run_io(_make_dirs, path)
        return ExecutionResult.ok({"path": str(path)})

    async def _op_delete(self, params: PathParams) -> ExecutionResult:
        path = self.resolve_path(params.path)
        await _run_io(os.remove, path)
        return ExecutionResult.ok(None)

    # ── Transfer Operations ──────────────────────────────────────────────

    async def _op_copy(self, params: TransferParams) -> ExecutionResult:
        src = self.resolve_path(params.from_)
        dest = self.resolve_path(params.to)
        await _run_io(_copy_file, src, dest)
        return ExecutionResult.ok({"from": str(src), "to": str(dest)})

    async def _op_move(self, params: TransferParams) -> ExecutionResult:
        src = self.resolve_path(params.from_)
        dest = self.resolve_path(params.to)
        await _run_io(os.rename, src, dest)
        return ExecutionResult.ok({"from": str(src), "to": str(dest)})
