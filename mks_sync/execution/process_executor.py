"""Process execution for the si command-line client.

The adapter never spawns processes directly: it talks to a ``ProcessExecutor``
so tests and embedding applications can substitute their own implementation.
"""

import subprocess
from typing import Protocol

import structlog
from pydantic import BaseModel, Field

from mks_sync.commands.command_builder import mask_arguments
from mks_sync.errors import InvocationError

log = structlog.stdlib.get_logger()


class ProcessResult(BaseModel):
    """Captured output of one finished process."""

    stdout: str = Field(default="", description="Captured standard output")
    stderr: str = Field(default="", description="Captured standard error")
    exit_code: int = Field(default=0, description="Process exit status")

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


class ProcessExecutor(Protocol):
    """Runs an executable and captures its output."""

    def execute(self, executable: str, args: list[str], timeout: float) -> ProcessResult:
        """Run ``executable`` with ``args``, waiting at most ``timeout`` seconds.

        Raises:
            InvocationError: If the process cannot be started or times out.
        """
        ...


class SubprocessExecutor:
    """ProcessExecutor backed by ``subprocess.run``.

    Output is decoded with a fixed encoding rather than the locale codec.
    Undecodable bytes, such as a cp1252 author name, become U+FFFD instead of
    failing the whole command.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def execute(self, executable: str, args: list[str], timeout: float) -> ProcessResult:
        command = [executable, *args]
        try:
            completed = subprocess.run(
                command,
                capture_output=True,
                encoding=self.encoding,
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            log.error(
                "process_timed_out",
                command=mask_arguments(command),
                timeout_seconds=timeout,
            )
            raise InvocationError(
                f"{executable} did not finish within {timeout} seconds",
                command=mask_arguments(command),
            ) from e
        except OSError as e:
            log.error(
                "process_start_failed",
                command=mask_arguments(command),
                error=str(e),
            )
            raise InvocationError(
                f"Failed to start {executable}: {e}", command=mask_arguments(command)
            ) from e

        return ProcessResult(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_code=completed.returncode,
        )


def execute_checked(
    executor: ProcessExecutor,
    executable: str,
    args: list[str],
    timeout: float,
    description: str,
) -> ProcessResult:
    """
    Execute a command and treat a non-zero exit code as failure.

    Args:
        executor: Executor used to run the command
        executable: Program to run
        args: Argument list
        timeout: Timeout in seconds
        description: Event name logged before the command runs

    Returns:
        ProcessResult of the successful run

    Raises:
        InvocationError: If the process could not run or exited non-zero
    """
    public_args = mask_arguments(args)
    log.info(description, executable=executable, arguments=public_args)

    result = executor.execute(executable, args, timeout)

    if not result.succeeded:
        log.error(
            "process_failed",
            executable=executable,
            arguments=public_args,
            exit_code=result.exit_code,
            stderr=result.stderr.strip(),
        )
        raise InvocationError(
            f"{executable} {public_args[0] if public_args else ''} exited with code {result.exit_code}",
            command=[executable, *public_args],
            exit_code=result.exit_code,
            stderr=result.stderr,
        )

    log.debug("process_completed", executable=executable, stdout_length=len(result.stdout))
    return result
