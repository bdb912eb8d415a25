"""Build-cycle window filtering of detected modifications."""

from datetime import datetime, timezone
from enum import Enum

import structlog

from mks_sync.models.config import MksConfig
from mks_sync.models.modification import Modification

log = structlog.stdlib.get_logger()


class FilterPolicy(str, Enum):
    """How the change listing is narrowed to one build cycle."""

    # Keep only changes whose time falls inside the build window.
    TIMEFRAME = "timeframe"
    # The listing is already bounded by the last checkpoint.
    CHECKPOINT_BOUNDARY = "checkpoint_boundary"


def select_filter_policy(config: MksConfig) -> FilterPolicy:
    if config.checkpoint_on_success:
        return FilterPolicy.CHECKPOINT_BOUNDARY
    return FilterPolicy.TIMEFRAME


def _comparable(value: datetime) -> datetime:
    # Naive timestamps are treated as UTC so they can be compared with aware ones.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_in_timeframe(modified_time: datetime | None, from_time: datetime, to_time: datetime) -> bool:
    if modified_time is None:
        return False
    return _comparable(from_time) <= _comparable(modified_time) <= _comparable(to_time)


def filter_on_timeframe(
    modifications: list[Modification], from_time: datetime, to_time: datetime
) -> list[Modification]:
    """
    Keep modifications made within ``[from_time, to_time]``.

    Deleted members are always kept since they have no reliable timestamp
    once removed. Order is preserved.

    Args:
        modifications: Enriched modifications
        from_time: Start of the build window (inclusive)
        to_time: End of the build window (inclusive)

    Returns:
        New list with the retained modifications
    """
    kept = [
        modification
        for modification in modifications
        if modification.is_deleted
        or is_in_timeframe(modification.modified_time, from_time, to_time)
    ]

    log.info(
        "modifications_filtered_on_timeframe",
        from_time=from_time,
        to_time=to_time,
        total=len(modifications),
        kept=len(kept),
        dropped=len(modifications) - len(kept),
    )
    return kept


def apply_filter_policy(
    policy: FilterPolicy,
    modifications: list[Modification],
    from_time: datetime,
    to_time: datetime,
) -> list[Modification]:
    if policy is FilterPolicy.CHECKPOINT_BOUNDARY:
        log.debug("timeframe_filter_skipped", policy=policy.value, count=len(modifications))
        return list(modifications)
    return filter_on_timeframe(modifications, from_time, to_time)
