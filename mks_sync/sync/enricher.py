"""Member detail enrichment for detected modifications."""

import structlog

from mks_sync.commands.command_builder import CommandBuilder
from mks_sync.execution.process_executor import ProcessExecutor, execute_checked
from mks_sync.models.config import MksConfig
from mks_sync.models.modification import Modification
from mks_sync.parsing.history_parser import MksHistoryParser

log = structlog.stdlib.get_logger()


class ModificationEnricher:
    """Adds author, comment, time and revision to added and modified members."""

    def __init__(
        self,
        config: MksConfig,
        executor: ProcessExecutor,
        command_builder: CommandBuilder,
        parser: MksHistoryParser,
    ):
        self._config = config
        self._executor = executor
        self._command_builder = command_builder
        self._parser = parser

    def enrich(self, modifications: list[Modification]) -> list[Modification]:
        """
        Query member details for every non-deleted modification.

        Members are queried one at a time in list order. Deleted members no
        longer exist in the sandbox and are left as reported.

        Args:
            modifications: Records from the change listing, updated in place

        Returns:
            The same list

        Raises:
            InvocationError: If a memberinfo call fails
            ParseError: If a memberinfo report cannot be read
        """
        # Deleted members are not queried
        pending = [modification for modification in modifications if not modification.is_deleted]
        log.info(
            "enriching_modifications",
            total=len(modifications),
            pending=len(pending),
            skipped_deleted=len(modifications) - len(pending),
        )

        for modification in pending:
            self.enrich_one(modification)

        log.info("modifications_enriched", count=len(pending))
        return modifications

    def enrich_one(self, modification: Modification) -> Modification:
        """Query and merge the details of a single member."""
        args = self._command_builder.member_info(modification)
        result = execute_checked(
            self._executor,
            self._config.executable,
            args,
            self._config.timeout_seconds,
            "fetching_member_info",
        )
        return self._parser.parse_member_info(modification, result.stdout)
