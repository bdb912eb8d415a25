"""Command construction for the si client."""

from mks_sync.commands.command_builder import CommandBuilder, mask_arguments

__all__ = ["CommandBuilder", "mask_arguments"]
