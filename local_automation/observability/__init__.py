"""
local_automation.observability — Structured logging.
"""

from local_automation.observability.logger import JSONFormatter, setup_logging

__all__ = ["JSONFormatter", "setup_logging"]
