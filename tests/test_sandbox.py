"""Tests for the post-resync read-only cleanup."""

import stat

import pytest

from mks_sync.errors import SandboxError
from mks_sync.sync.sandbox import clear_read_only


def _writable(path) -> bool:
    return bool(path.stat().st_mode & stat.S_IWUSR)


def test_clears_read_only_recursively(tmp_path):
    nested = tmp_path / "src" / "deep"
    nested.mkdir(parents=True)
    files = [tmp_path / "root.txt", tmp_path / "src" / "a.c", nested / "b.h"]
    for path in files:
        path.write_text("content")
        path.chmod(0o444)

    changed = clear_read_only(tmp_path)

    assert changed == 3
    assert all(_writable(path) for path in files)


def test_already_writable_entries_are_untouched(tmp_path):
    member = tmp_path / "a.c"
    member.write_text("x")
    member.chmod(0o640)

    assert clear_read_only(tmp_path) == 0
    assert stat.S_IMODE(member.stat().st_mode) == 0o640


def test_other_permission_bits_are_preserved(tmp_path):
    script = tmp_path / "build.sh"
    script.write_text("#!/bin/sh\n")
    script.chmod(0o555)

    clear_read_only(tmp_path)

    assert stat.S_IMODE(script.stat().st_mode) == 0o755


def test_missing_sandbox_root_raises(tmp_path):
    with pytest.raises(SandboxError):
        clear_read_only(tmp_path / "missing")
