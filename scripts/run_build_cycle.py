#!/usr/bin/env python3
"""
Run one build cycle against an MKS Source Integrity sandbox.

This script:
- Lists the members changed within the build window
- Optionally resynchronizes the sandbox
- Optionally checkpoints the project for a successful build

Usage:
    python scripts/run_build_cycle.py --from 2024-01-01T00:00:00 [--to ...]
        [--config CONFIG_PATH] [--get-source] [--label LABEL --succeeded] [--json]
"""

import argparse
import json
import sys
from datetime import datetime, timezone

import structlog

from mks_sync.errors import MksError
from mks_sync.models.modification import IntegrationResult
from mks_sync.providers import get_source_control
from mks_sync.utils.config_loader import ConfigLoader
from mks_sync.utils.logging_config import configure_from_config, configure_logging

log = structlog.stdlib.get_logger()


def run_cycle(
    config_path: str | None,
    from_time: datetime,
    to_time: datetime,
    get_source: bool = False,
    label: str | None = None,
    succeeded: bool = False,
    verbose: bool = False,
) -> dict:
    """
    Run the requested build-cycle steps.

    Returns:
        Dictionary with the detected modifications and step outcomes
    """
    config = ConfigLoader().load_config(config_path)
    configure_from_config(config.logging, verbose=verbose)

    source_control = get_source_control(config.source_control)
    result = IntegrationResult(succeeded=succeeded, label=label or "", start_time=to_time)

    modifications = source_control.get_modifications(from_time, to_time)

    if get_source:
        source_control.get_source(result)

    if label:
        source_control.label_source_control(result)

    return {
        "success": True,
        "from": from_time.isoformat(),
        "to": to_time.isoformat(),
        "modification_count": len(modifications),
        "modifications": [modification.model_dump(mode="json") for modification in modifications],
        "source_retrieved": get_source and config.source_control.auto_get_source,
        "checkpointed": bool(label)
        and succeeded
        and config.source_control.checkpoint_on_success,
    }


def _parse_time(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid ISO 8601 timestamp: {value}") from e


def main():
    """Main entry point for the build-cycle script."""
    parser = argparse.ArgumentParser(
        description="Detect MKS sandbox changes for a build cycle"
    )
    parser.add_argument("--config", type=str, help="Path to configuration file", default=None)
    parser.add_argument(
        "--from", dest="from_time", type=_parse_time, required=True, help="Window start (ISO 8601)"
    )
    parser.add_argument(
        "--to", dest="to_time", type=_parse_time, default=None, help="Window end, defaults to now"
    )
    parser.add_argument("--get-source", action="store_true", help="Resynchronize the sandbox")
    parser.add_argument("--label", type=str, default=None, help="Build label to checkpoint")
    parser.add_argument("--succeeded", action="store_true", help="Mark the build as succeeded")
    parser.add_argument("--json", action="store_true", help="Output results in JSON format")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args()
    configure_logging(log_level="DEBUG" if args.verbose else "INFO", json_logs=False)

    to_time = args.to_time or datetime.now(timezone.utc)

    try:
        stats = run_cycle(
            config_path=args.config,
            from_time=args.from_time,
            to_time=to_time,
            get_source=args.get_source,
            label=args.label,
            succeeded=args.succeeded,
            verbose=args.verbose,
        )
    except MksError as e:
        log.error("build_cycle_failed", error=str(e), error_type=type(e).__name__)
        stats = {"success": False, "error": str(e), "error_type": type(e).__name__}

    if args.json:
        print(json.dumps(stats, indent=2))
    else:
        print("\n" + "=" * 60)
        print("BUILD CYCLE SUMMARY")
        print("=" * 60)
        if stats["success"]:
            print(f"Window: {stats['from']} .. {stats['to']}")
            print(f"Modifications: {stats['modification_count']}")
            for modification in stats["modifications"]:
                folder = modification["folder_name"] or "."
                print(
                    f"  {modification['type']:<8} {folder}/{modification['file_name']}"
                    f"  {modification['version'] or '-'}  {modification['user_name'] or '-'}"
                )
            print(f"Source retrieved: {stats['source_retrieved']}")
            print(f"Checkpointed: {stats['checkpointed']}")
        else:
            print(f"Status: FAILED ({stats['error_type']})")
            print(f"Error: {stats['error']}")
        print("=" * 60)

    sys.exit(0 if stats["success"] else 1)


if __name__ == "__main__":
    main()
