"""Checkpointing of successful builds."""

import structlog

from mks_sync.commands.command_builder import CommandBuilder
from mks_sync.execution.process_executor import ProcessExecutor, execute_checked
from mks_sync.models.config import MksConfig
from mks_sync.models.modification import IntegrationResult

log = structlog.stdlib.get_logger()


class CheckpointIssuer:
    """Labels the project with the build label after a successful build."""

    def __init__(self, config: MksConfig, executor: ProcessExecutor, command_builder: CommandBuilder):
        self._config = config
        self._executor = executor
        self._command_builder = command_builder

    def should_checkpoint(self, result: IntegrationResult) -> bool:
        return self._config.checkpoint_on_success and result.succeeded

    def label_source_control(self, result: IntegrationResult) -> bool:
        """
        Checkpoint the project if enabled and the build succeeded.

        Returns:
            True if a checkpoint was created

        Raises:
            LabelError: If the build label is unusable
            InvocationError: If ``si checkpoint`` fails
        """
        if not self.should_checkpoint(result):
            log.info(
                "checkpoint_skipped",
                label=result.label,
                checkpoint_on_success=self._config.checkpoint_on_success,
                succeeded=result.succeeded,
            )
            return False

        # Checkpoint the project with the build label
        execute_checked(
            self._executor,
            self._config.executable,
            self._command_builder.checkpoint(result.label),
            self._config.timeout_seconds,
            "adding_checkpoint",
        )
        log.info("checkpoint_added", label=result.label)
        return True
