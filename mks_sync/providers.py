"""Factory functions wiring the adapter from configuration.

Developers can modify these functions to swap the process executor (for
example, to run si on a remote agent) without changing other code.
"""

import shutil

import structlog

from mks_sync.errors import ConfigurationError
from mks_sync.execution.process_executor import ProcessExecutor, SubprocessExecutor
from mks_sync.models.config import MksConfig
from mks_sync.sync.source_control import MksSourceControl

log = structlog.stdlib.get_logger()


def get_process_executor() -> ProcessExecutor:
    """Get the configured process executor.

    Default: SubprocessExecutor, running si locally.
    """
    return SubprocessExecutor()


def resolve_executable(executable: str) -> str | None:
    """Return the full path of ``executable`` if it can be found, else None."""
    if not executable or not executable.strip():
        return None
    return shutil.which(executable)


def get_source_control(
    config: MksConfig, executor: ProcessExecutor | None = None
) -> MksSourceControl:
    """Get a source-control block for a sandbox.

    Args:
        config: Sandbox configuration
        executor: Optional executor (uses get_process_executor() if None)

    Returns:
        MksSourceControl instance

    Raises:
        ConfigurationError: If the sandbox settings are blank
    """
    if not config.sandbox_root.strip() or not config.sandbox_file.strip():
        error_msg = "sandbox_root and sandbox_file cannot be empty"
        log.error("get_source_control_failed", error=error_msg)
        raise ConfigurationError(error_msg)

    return MksSourceControl(
        config, executor=executor if executor is not None else get_process_executor()
    )
