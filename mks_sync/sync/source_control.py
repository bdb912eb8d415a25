"""MKS Source Integrity source-control block used by the build orchestrator."""

from datetime import datetime

import structlog

from mks_sync.commands.command_builder import CommandBuilder
from mks_sync.errors import ConfigurationError
from mks_sync.execution.process_executor import (
    ProcessExecutor,
    SubprocessExecutor,
    execute_checked,
)
from mks_sync.models.config import MksConfig
from mks_sync.models.modification import IntegrationResult, Modification
from mks_sync.parsing.history_parser import MksHistoryParser
from mks_sync.sync.checkpoint import CheckpointIssuer
from mks_sync.sync.enricher import ModificationEnricher
from mks_sync.sync.sandbox import SandboxSynchronizer
from mks_sync.sync.timeframe_filter import apply_filter_policy, select_filter_policy

log = structlog.stdlib.get_logger()


class MksSourceControl:
    """Detects sandbox changes, resynchronizes the sandbox and checkpoints builds."""

    def __init__(
        self,
        config: MksConfig,
        executor: ProcessExecutor | None = None,
        parser: MksHistoryParser | None = None,
    ):
        """
        Initialize the source-control block.

        Args:
            config: Sandbox configuration
            executor: Optional process executor (runs si through subprocess if None)
            parser: Optional report parser (one rooted at the sandbox if None)
        """
        self._config: MksConfig = config
        self._executor: ProcessExecutor = executor if executor is not None else SubprocessExecutor()
        self._parser: MksHistoryParser = (
            parser if parser is not None else MksHistoryParser(config.sandbox_root)
        )
        self._command_builder: CommandBuilder = CommandBuilder(config)

        self._enricher = ModificationEnricher(
            config, self._executor, self._command_builder, self._parser
        )
        self._synchronizer = SandboxSynchronizer(config, self._executor, self._command_builder)
        self._checkpoint_issuer = CheckpointIssuer(config, self._executor, self._command_builder)

        log.info(
            "mks_source_control_initialized",
            executable=config.executable,
            hostname=config.hostname,
            port=config.port,
            sandbox=str(config.sandbox_path),
        )

    @property
    def config(self) -> MksConfig:
        return self._config

    def get_modifications(self, from_time: datetime, to_time: datetime) -> list[Modification]:
        """
        Detect the sandbox members changed within a build cycle.

        This method:
        1. Lists changed members with ``si viewsandbox``
        2. Fetches member details for every added or modified member
        3. Narrows the result to ``[from_time, to_time]`` unless checkpoints
           bound the listing

        Args:
            from_time: Start of the build window
            to_time: End of the build window

        Returns:
            Modifications for the cycle, possibly empty

        Raises:
            ConfigurationError: If the sandbox configuration is incomplete
            InvocationError: If an si call fails or times out
            ParseError: If si output cannot be read
        """
        self._validate_config()
        log.info("getting_modifications", from_time=from_time, to_time=to_time)

        # List changed members
        result = execute_checked(
            self._executor,
            self._config.executable,
            self._command_builder.view_sandbox_changes(),
            self._config.timeout_seconds,
            "listing_sandbox_changes",
        )
        modifications = self._parser.parse_sandbox_changes(result.stdout)

        # Fetch member details
        self._enricher.enrich(modifications)

        # Apply filter policy
        policy = select_filter_policy(self._config)
        modifications = apply_filter_policy(policy, modifications, from_time, to_time)

        log.info("modifications_detected", count=len(modifications), policy=policy.value)
        return modifications

    def get_source(self, result: IntegrationResult) -> None:
        """Resynchronize the sandbox if ``auto_get_source`` is enabled."""
        if self._config.auto_get_source:
            self._validate_config()
        self._synchronizer.get_source(result)

    def label_source_control(self, result: IntegrationResult) -> None:
        """Checkpoint the project if enabled and the build succeeded."""
        if self._checkpoint_issuer.should_checkpoint(result):
            self._validate_config()
        self._checkpoint_issuer.label_source_control(result)

    def _validate_config(self) -> None:
        missing = [
            name
            for name in ("executable", "sandbox_root", "sandbox_file")
            if not str(getattr(self._config, name) or "").strip()
        ]
        if missing:
            log.error("incomplete_configuration", missing=missing)
            raise ConfigurationError(
                f"Missing required source control settings: {', '.join(missing)}"
            )
