"""Shared utilities for configuration and logging"""

from mks_sync.utils.config_loader import ConfigLoader
from mks_sync.utils.logging_config import configure_logging

__all__ = ["ConfigLoader", "configure_logging"]
