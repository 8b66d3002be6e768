"""
Tests for the ``python -m local_automation`` entry point and JSON logging.
"""

import json
import logging

import pytest

import local_automation.__main__ as entry
from local_automation.execution.file_executor import FileExecutor
from local_automation.observability.logger import JSONFormatter, setup_logging
from local_automation.utils.config import ObservabilityConfig
from local_automation.utils.types import Task


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.setattr(entry, "setup_logging", lambda *a, **kw: None)
    path = tmp_path / "config.yaml"
    path.write_text(
        f"execution:\n  base_path: {tmp_path / 'sandbox'}\n"
        f"observability:\n  log_dir: {tmp_path / 'logs'}\n"
    )
    return str(path)


def test_write_then_read(config_file, tmp_path, capsys):
    code = entry.main(
        ["--config", config_file, "file", "write", '{"path": "a.txt", "content": "hi"}']
    )
    assert code == 0
    assert (tmp_path / "sandbox" / "a.txt").read_text() == "hi"
    capsys.readouterr()

    code = entry.main(["--config", config_file, "file", "read", '{"path": "a.txt"}'])
    out = json.loads(capsys.readouterr().out)
    assert code == 0
    assert out == {"success": True, "output": {"content": "hi"}, "error": None}


def test_failure_exit_code(config_file, capsys):
    code = entry.main(["--config", config_file, "file", "read", '{"path": "../etc/passwd"}'])
    err = json.loads(capsys.readouterr().err)
    assert code == 1
    assert err["kind"] == "permission_denied"
    assert "Path traversal" in err["error"]


def test_bad_params_json(config_file, capsys):
    code = entry.main(["--config", config_file, "file", "read", "{oops"])
    assert code == 2
    assert "Invalid params JSON" in capsys.readouterr().err


def test_json_formatter_includes_task_fields():
    record = logging.LogRecord("local_automation", logging.INFO, __file__, 1, "done %s", ("x",), None)
    record.task_id = "abc"
    record.operation = "read"
    entry_json = json.loads(JSONFormatter().format(record))
    assert entry_json["message"] == "done x"
    assert entry_json["task_id"] == "abc"
    assert entry_json["operation"] == "read"
    assert "executor" not in entry_json
    assert entry_json["level"] == "INFO"
    assert entry_json["timestamp"].endswith("Z")


@pytest.fixture
def restore_package_logger():
    package_logger = logging.getLogger("local_automation")
    level = package_logger.level
    yield
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()
    package_logger.setLevel(level)


@pytest.mark.asyncio
async def test_setup_logging_writes_task_fields(tmp_path, restore_package_logger):
    config = ObservabilityConfig(log_dir=str(tmp_path / "logs"))
    setup_logging(config)

    executor = FileExecutor(tmp_path)
    task = Task("file", "exists", {"path": "x"})
    await executor.execute(task)
    for handler in logging.getLogger("local_automation").handlers:
        handler.flush()

    lines = (tmp_path / "logs" / config.log_file).read_text(encoding="utf-8").splitlines()
    entries = [json.loads(line) for line in lines]
    done = [e for e in entries if e.get("task_id") == task.id and e["level"] == "INFO"]
    assert done
    assert done[0]["executor"] == "file"
    assert done[0]["operation"] == "exists"
    assert done[0]["component"] == "local_automation.execution.file_executor"


def test_setup_logging_replaces_previous_handlers(tmp_path, restore_package_logger):
    config = ObservabilityConfig(log_dir=str(tmp_path / "logs"))
    setup_logging(config)
    package_logger = setup_logging(config, debug=True)
    assert len(package_logger.handlers) == 2
    assert {h.level for h in package_logger.handlers} == {logging.DEBUG}
