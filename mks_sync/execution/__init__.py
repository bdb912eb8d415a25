"""Process execution for the si client."""

from mks_sync.execution.process_executor import (
    ProcessExecutor,
    ProcessResult,
    SubprocessExecutor,
    execute_checked,
)

__all__ = ["ProcessExecutor", "ProcessResult", "SubprocessExecutor", "execute_checked"]
