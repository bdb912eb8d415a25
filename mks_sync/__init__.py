"""MKS Source Integrity change detection and sandbox synchronization."""

from mks_sync.errors import (
    ConfigurationError,
    InvocationError,
    LabelError,
    MksError,
    ParseError,
    SandboxError,
)
from mks_sync.models import IntegrationResult, MksConfig, Modification, ModificationType
from mks_sync.sync import MksSourceControl

__all__ = [
    "ConfigurationError",
    "IntegrationResult",
    "InvocationError",
    "LabelError",
    "MksConfig",
    "MksError",
    "MksSourceControl",
    "Modification",
    "ModificationType",
    "ParseError",
    "SandboxError",
]
