"""Tests for the provider factory functions."""

import sys

import pytest

from tests.helpers import RecordingExecutor, make_config
from mks_sync.errors import ConfigurationError
from mks_sync.execution.process_executor import SubprocessExecutor
from mks_sync.providers import get_process_executor, get_source_control, resolve_executable
from mks_sync.sync.source_control import MksSourceControl


def test_default_executor_is_subprocess_backed():
    assert isinstance(get_process_executor(), SubprocessExecutor)


def test_get_source_control_uses_given_executor():
    executor = RecordingExecutor()

    source_control = get_source_control(make_config(checkpoint_on_success=True), executor)

    assert isinstance(source_control, MksSourceControl)
    assert source_control.config.checkpoint_on_success is True


@pytest.mark.parametrize("field", ["sandbox_root", "sandbox_file"])
def test_get_source_control_rejects_blank_sandbox(field):
    with pytest.raises(ConfigurationError):
        get_source_control(make_config(**{field: " "}))


def test_resolve_executable():
    assert resolve_executable(sys.executable) is not None
    assert resolve_executable("") is None
    assert resolve_executable("definitely-not-an-si-client-binary") is None
