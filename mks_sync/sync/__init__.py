"""Change detection, sandbox synchronization and checkpointing."""

from mks_sync.sync.checkpoint import CheckpointIssuer
from mks_sync.sync.enricher import ModificationEnricher
from mks_sync.sync.sandbox import SandboxSynchronizer, clear_read_only
from mks_sync.sync.source_control import MksSourceControl
from mks_sync.sync.timeframe_filter import (
    FilterPolicy,
    apply_filter_policy,
    filter_on_timeframe,
    select_filter_policy,
)

__all__ = [
    "CheckpointIssuer",
    "FilterPolicy",
    "MksSourceControl",
    "ModificationEnricher",
    "SandboxSynchronizer",
    "apply_filter_policy",
    "clear_read_only",
    "filter_on_timeframe",
    "select_filter_policy",
]
