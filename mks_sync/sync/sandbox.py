"""Sandbox resynchronization."""

import os
import stat
from pathlib import Path

import structlog

from mks_sync.commands.command_builder import CommandBuilder
from mks_sync.errors import SandboxError
from mks_sync.execution.process_executor import ProcessExecutor, execute_checked
from mks_sync.models.config import MksConfig
from mks_sync.models.modification import IntegrationResult

log = structlog.stdlib.get_logger()


def clear_read_only(root: str | Path) -> int:
    """
    Make every file and directory below ``root`` writable by its owner.

    ``si resync --restoreTimestamp`` leaves members read-only, which stops
    builds from overwriting or deleting them.

    Args:
        root: Sandbox root directory

    Returns:
        Number of entries whose permissions were changed

    Raises:
        SandboxError: If the root is missing or a permission cannot be changed
    """
    root_path = Path(root)
    if not root_path.is_dir():
        raise SandboxError(f"Sandbox root does not exist: {root_path}")

    # Directories as well as files
    changed = 0
    for dirpath, dirnames, filenames in os.walk(root_path):
        for name in [*dirnames, *filenames]:
            if _make_writable(Path(dirpath) / name):
                changed += 1

    log.info("read_only_attributes_cleared", sandbox_root=str(root_path), changed=changed)
    return changed


def _make_writable(path: Path) -> bool:
    try:
        mode = path.lstat().st_mode
        # Leave symlinks and writable entries alone
        if stat.S_ISLNK(mode) or mode & stat.S_IWUSR:
            return False
        os.chmod(path, stat.S_IMODE(mode) | stat.S_IWUSR)
        return True
    except OSError as e:
        log.error("failed_to_clear_read_only", path=str(path), error=str(e))
        raise SandboxError(f"Failed to make {path} writable: {e}") from e


class SandboxSynchronizer:
    """Brings the local sandbox up to date before a build."""

    def __init__(self, config: MksConfig, executor: ProcessExecutor, command_builder: CommandBuilder):
        self._config = config
        self._executor = executor
        self._command_builder = command_builder

    def get_source(self, result: IntegrationResult) -> bool:
        """
        Resynchronize the sandbox when automatic source retrieval is enabled.

        Args:
            result: Current build result

        Returns:
            True if a resync ran, False when disabled

        Raises:
            InvocationError: If ``si resync`` fails
            SandboxError: If the read-only cleanup fails
        """
        if not self._config.auto_get_source:
            log.info("get_source_skipped", label=result.label, reason="auto_get_source disabled")
            return False

        # Resync from the server
        execute_checked(
            self._executor,
            self._config.executable,
            self._command_builder.resync(),
            self._config.timeout_seconds,
            "resynchronizing_source",
        )

        # Members come back read-only
        clear_read_only(self._config.sandbox_root)
        return True
