"""Data models for the MKS source-control adapter."""

from mks_sync.models.config import AppConfig, LoggingConfig, MksConfig
from mks_sync.models.modification import IntegrationResult, Modification, ModificationType

__all__ = [
    "AppConfig",
    "IntegrationResult",
    "LoggingConfig",
    "MksConfig",
    "Modification",
    "ModificationType",
]
