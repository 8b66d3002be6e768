"""
local_automation.utils.config — Centralized configuration with YAML loading and defaults.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, is_dataclass
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ExecutionConfig:
    base_path: str = "workspace"  # sandbox root for the file executor
    # False keeps the literal '..' check only; True also requires the
    # canonical path to stay under base_path
    strict_sandbox: bool = False
    create_base_path: bool = True


@dataclass
class ObservabilityConfig:
    log_dir: str = "logs"
    log_file: str = "local_automation.jsonl"
    console_level: str = "INFO"


@dataclass
class AutomationConfig:
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    observability: ObservabilityConfig = field(default_factory=ObservabilityConfig)
    debug: bool = False

    @classmethod
    def load(cls, config_path: str = "config.yaml") -> "AutomationConfig":
        """Read ``config_path`` if it exists; missing sections and keys keep defaults."""
        path = Path(config_path)
        if not path.exists():
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return _apply(cls(), data, path.name)

    def ensure_dirs(self):
        """Create the log directory and, if configured, the sandbox root."""
        Path(self.observability.log_dir).mkdir(parents=True, exist_ok=True)
        if self.execution.create_base_path:
            Path(self.execution.base_path).mkdir(parents=True, exist_ok=True)


def _apply(target, data: dict, where: str):
    """Overlay YAML mapping ``data`` onto dataclass ``target``, section by section."""
    known = {f.name for f in fields(target)}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown config key %s.%s", where, key)
            continue
        current = getattr(target, key)
        if is_dataclass(current) and isinstance(value, dict):
            _apply(current, value, f"{where}.{key}")
        else:
            setattr(target, key, value)
    return target
