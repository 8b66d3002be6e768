"""
local_automation.execution.params — Typed parameter shapes for executor operations.

A task's ``params`` is an arbitrary JSON value. Each operation decodes it into
one of the dataclasses below before touching the filesystem; any mismatch
raises InvalidConfigError carrying the decode message. Unknown keys are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, TypeVar, get_args, get_origin, get_type_hints

from local_automation.utils.errors import InvalidConfigError

P = TypeVar("P")


@dataclass
class PathParams:
    path: str


@dataclass
class WriteParams:
    path: str
    content: str


@dataclass
class WriteJsonParams:
    path: str
    data: Any


@dataclass
class WriteCsvParams:
    path: str
    headers: list[str]
    rows: list[list[str]]


@dataclass
class TransferParams:
    """Source/destination pair for copy and move."""

    from_: str = field(metadata={"key": "from"})
    to: str = field(metadata={"key": "to"})


# ── Decoding ─────────────────────────────────────────────────────────────────


def _describe(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return f"boolean `{str(value).lower()}`"
    if isinstance(value, int):
        return f"integer `{value}`"
    if isinstance(value, float):
        return f"floating point `{value}`"
    if isinstance(value, str):
        return f'string "{value}"'
    if isinstance(value, list):
        return "sequence"
    if isinstance(value, dict):
        return "map"
    return type(value).__name__


def _check(value: Any, hint: Any, where: str) -> Any:
    if hint is Any:
        return value
    if hint is str:
        if not isinstance(value, str):
            raise InvalidConfigError(
                f"invalid type: {_describe(value)}, expected a string at `{where}`"
            )
        return value
    if get_origin(hint) is list:
        if not isinstance(value, list):
            raise InvalidConfigError(
                f"invalid type: {_describe(value)}, expected a sequence at `{where}`"
            )
        (item_hint,) = get_args(hint)
        return [_check(item, item_hint, f"{where}[{i}]") for i, item in enumerate(value)]
    raise TypeError(f"Unsupported parameter type: {hint!r}")


def decode_params(cls: type[P], raw: Any) -> P:
    """Decode a raw params value into ``cls``. Raises InvalidConfigError on mismatch."""
    if not isinstance(raw, dict):
        raise InvalidConfigError(
            f"invalid type: {_describe(raw)}, expected struct {cls.__name__}"
        )
    hints = get_type_hints(cls)
    values = {}
    for f in fields(cls):
        key = f.metadata.get("key", f.name)
        if key not in raw:
            raise InvalidConfigError(f"missing field `{key}`")
        values[f.name] = _check(raw[key], hints[f.name], key)
    return cls(**values)
