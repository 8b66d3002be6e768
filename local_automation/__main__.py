"""
local_automation — run a single task against the configured executors.
Entry point: python -m local_automation EXECUTOR OPERATION [PARAMS_JSON]
"""

import argparse
import asyncio
import json
import logging
import sys

from local_automation.execution.registry import ExecutorRegistry
from local_automation.observability.logger import setup_logging
from local_automation.utils.config import AutomationConfig
from local_automation.utils.errors import AutomationError
from local_automation.utils.types import Task

logger = logging.getLogger("local_automation")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="local_automation", description="Run one task against a local executor."
    )
    parser.add_argument("executor", help="Executor name, e.g. 'file'")
    parser.add_argument("operation", help="Operation name, e.g. 'read'")
    parser.add_argument("params", nargs="?", default="{}", help="Params as a JSON value")
    parser.add_argument("--config", default="config.yaml", help="YAML config file")
    return parser


async def run(config: AutomationConfig, task: Task) -> int:
    registry = ExecutorRegistry.from_config(config)
    try:
        result = await registry.dispatch(task)
    except AutomationError as e:
        logger.error("Task %s failed: %s", task.id, e)
        print(json.dumps({"error": str(e), "kind": e.kind.value}), file=sys.stderr)
        return 1

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        params = json.loads(args.params)
    except json.JSONDecodeError as e:
        print(f"Invalid params JSON: {e}", file=sys.stderr)
        return 2

    config = AutomationConfig.load(args.config)
    config.ensure_dirs()
    setup_logging(config.observability, debug=config.debug)

    task = Task(executor=args.executor, operation=args.operation, params=params)
    return asyncio.run(run(config, task))


if __name__ == "__main__":
    sys.exit(main())
