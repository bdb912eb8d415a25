"""Argument-list construction for the si command-line client."""

import structlog

from mks_sync.errors import LabelError
from mks_sync.models.config import MksConfig
from mks_sync.models.modification import Modification

log = structlog.stdlib.get_logger()

PASSWORD_PREFIX = "--password="
MASK = "********"

# NUL and line breaks cannot be carried in one argv token or an MKS label.
_FORBIDDEN_LABEL_CHARACTERS = frozenset("\x00\r\n")


def mask_arguments(args: list[str]) -> list[str]:
    """Return a copy of ``args`` safe for logging, with the password hidden."""
    return [PASSWORD_PREFIX + MASK if arg.startswith(PASSWORD_PREFIX) else arg for arg in args]


class CommandBuilder:
    """Builds si argument lists from the sandbox configuration.

    Every method is pure: arguments are returned as discrete tokens and no
    shell quoting is ever applied, so values containing spaces or quotes
    reach si unchanged.
    """

    def __init__(self, config: MksConfig):
        self._config = config

    def resync(self) -> list[str]:
        args = [
            "resync",
            "--overwriteChanged",
            "--restoreTimestamp",
            "--forceConfirm=yes",
            "--includeDropped",
        ]
        args.extend(self._common_arguments(recurse=True))
        return args

    def checkpoint(self, label: str) -> list[str]:
        """
        Build the checkpoint command for a build label.

        Args:
            label: Build label, used in both the description and the MKS label

        Returns:
            Argument list for ``si checkpoint``

        Raises:
            LabelError: If the label is blank or contains line breaks or NUL
        """
        self.validate_label(label)
        args = [
            "checkpoint",
            "-d",
            f"{self._config.product_name} Build - {label}",
            "-L",
            f"Build - {label}",
        ]
        args.extend(self._common_arguments(recurse=True))
        return args

    def view_sandbox_changes(self) -> list[str]:
        args = ["viewsandbox", "--nopersist", "--filter=changed:all", "--xmlapi"]
        args.extend(self._common_arguments(recurse=True))
        return args

    def member_info(self, modification: Modification) -> list[str]:
        args = ["memberinfo", "--xmlapi"]
        args.extend(self._common_arguments(recurse=False, omit_sandbox=True))
        args.append(str(modification.member_path(self._config.sandbox_root)))
        return args

    @staticmethod
    def validate_label(label: str) -> None:
        if not label or not label.strip():
            raise LabelError("Checkpoint label cannot be empty")

        bad = sorted(repr(char) for char in set(label) & _FORBIDDEN_LABEL_CHARACTERS)
        if bad:
            log.error("invalid_checkpoint_label", label=label, characters=bad)
            raise LabelError(f"Checkpoint label {label!r} contains unsupported characters: {bad}")

    def _common_arguments(self, recurse: bool, omit_sandbox: bool = False) -> list[str]:
        args: list[str] = []
        if recurse:
            args.append("-R")

        if not omit_sandbox:
            args.extend(["-S", str(self._config.sandbox_path)])

        # Missing credentials are passed as empty values; --quiet keeps si
        # from prompting for them.
        args.append(f"--user={self._config.user or ''}")
        args.append(f"{PASSWORD_PREFIX}{self._config.password_value or ''}")
        args.append("--quiet")
        return args
