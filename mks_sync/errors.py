"""Exception hierarchy for the MKS source-control adapter."""

from typing import Sequence


class MksError(Exception):
    """Base class for all adapter failures."""

    pass


class ConfigurationError(MksError):
    """Raised when configuration is invalid or missing."""

    pass


class InvocationError(MksError):
    """Raised when the si executable fails to start, times out or exits non-zero."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = list(command) if command is not None else []
        self.exit_code = exit_code
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr:
            return f"{message}: {self.stderr.strip()}"
        return message


class ParseError(MksError):
    """Raised when si output does not have the expected structure."""

    pass


class SandboxError(MksError):
    """Raised when the local sandbox tree cannot be prepared for a build."""

    pass


class LabelError(MksError, ValueError):
    """Raised when a build label cannot be used as a checkpoint label."""

    pass
