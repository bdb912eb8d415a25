"""Shared pytest fixtures."""

import pytest

from mks_sync.models.config import MksConfig
from tests.helpers import RecordingExecutor, make_config


@pytest.fixture
def config() -> MksConfig:
    return make_config()


@pytest.fixture
def recording_executor() -> RecordingExecutor:
    return RecordingExecutor()
