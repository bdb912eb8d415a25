#!/usr/bin/env python3
"""
Health check script for the MKS source-control adapter.

Checks:
- Configuration validation
- si executable availability
- Sandbox root and project file presence

Usage:
    python scripts/health_check.py [--config CONFIG_PATH] [--json]

Exit codes:
    0: All checks passed
    1: One or more checks failed
"""

import argparse
import json
import sys
from datetime import datetime

import structlog

from mks_sync.errors import ConfigurationError
from mks_sync.models.config import AppConfig
from mks_sync.providers import resolve_executable
from mks_sync.utils.config_loader import ConfigLoader

log = structlog.stdlib.get_logger()


class HealthChecker:
    """Performs health checks on the adapter setup."""

    def __init__(self, config_path: str | None = None):
        self.config_path = config_path
        self.config: AppConfig | None = None
        self.results: dict[str, dict] = {}

    def check_configuration(self) -> bool:
        check_name = "configuration"
        log.info("checking_configuration")

        try:
            config_loader = ConfigLoader()
            self.config = config_loader.load_config(self.config_path)
            warnings = config_loader.validate_config(self.config)
        except ConfigurationError as e:
            self.results[check_name] = {
                "status": "fail",
                "message": str(e),
                "details": {},
            }
            return False

        source_control = self.config.source_control
        self.results[check_name] = {
            "status": "warn" if warnings else "pass",
            "message": "Configuration loaded successfully",
            "details": {
                "hostname": source_control.hostname,
                "port": source_control.port,
                "sandbox": str(source_control.sandbox_path),
                "auto_get_source": source_control.auto_get_source,
                "checkpoint_on_success": source_control.checkpoint_on_success,
                "warnings": warnings,
            },
        }
        return True

    def check_executable(self) -> bool:
        check_name = "executable"
        if self.config is None:
            self.results[check_name] = {"status": "skip", "message": "No configuration", "details": {}}
            return False

        executable = self.config.source_control.executable
        resolved = resolve_executable(executable)
        self.results[check_name] = {
            "status": "pass" if resolved else "fail",
            "message": f"Found {resolved}" if resolved else f"{executable} not found",
            "details": {"executable": executable},
        }
        return resolved is not None

    def check_sandbox(self) -> bool:
        check_name = "sandbox"
        if self.config is None:
            self.results[check_name] = {"status": "skip", "message": "No configuration", "details": {}}
            return False

        sandbox_path = self.config.source_control.sandbox_path
        exists = sandbox_path.is_file()
        self.results[check_name] = {
            "status": "pass" if exists else "fail",
            "message": "Sandbox project file found" if exists else "Sandbox project file missing",
            "details": {"sandbox": str(sandbox_path)},
        }
        return exists

    def run_all_checks(self) -> bool:
        checks = [self.check_configuration, self.check_executable, self.check_sandbox]
        # Every check runs so the summary is complete.
        return all([check() for check in checks])

    def get_summary(self) -> dict:
        failed = sum(1 for r in self.results.values() if r["status"] == "fail")
        return {
            "timestamp": datetime.now().isoformat(),
            "overall_status": "healthy" if failed == 0 else "unhealthy",
            "total_checks": len(self.results),
            "passed": sum(1 for r in self.results.values() if r["status"] == "pass"),
            "failed": failed,
            "warnings": sum(1 for r in self.results.values() if r["status"] == "warn"),
            "skipped": sum(1 for r in self.results.values() if r["status"] == "skip"),
            "checks": self.results,
        }


def main():
    """Main entry point for health check script."""
    parser = argparse.ArgumentParser(description="Health check for the MKS source-control adapter")
    parser.add_argument("--config", type=str, help="Path to configuration file", default=None)
    parser.add_argument("--json", action="store_true", help="Output results in JSON format")
    args = parser.parse_args()

    checker = HealthChecker(config_path=args.config)
    all_passed = checker.run_all_checks()
    summary = checker.get_summary()

    if args.json:
        print(json.dumps(summary, indent=2))
    else:
        print("\n" + "=" * 60)
        print("HEALTH CHECK SUMMARY")
        print("=" * 60)
        print(f"Overall Status: {summary['overall_status'].upper()}")
        for check_name, result in summary["checks"].items():
            print(f"  [{result['status'].upper():<4}] {check_name}: {result['message']}")
        print("=" * 60)

    sys.exit(0 if all_passed else 1)


if __name__ == "__main__":
    main()
