"""Tests for redirection resolution and target opening."""

import fcntl
import os

import pytest

from seashell.errors import PipelineSyntaxError, RedirectionError
from seashell.redirection import (
    Command, Redirection, RedirectKind, open_redirections, resolve,
)


class TestResolve:
    """Test the pure argv transformation."""

    def test_operators_removed_order_kept(self):
        cmd = resolve(["sort", "<", "in", "-r", ">", "out", "-n", "2>", "err"])
        assert cmd.argv == ["sort", "-r", "-n"]
        assert cmd.redirections == [
            Redirection(RedirectKind.INPUT, "in"),
            Redirection(RedirectKind.OUTPUT, "out"),
            Redirection(RedirectKind.ERROR_OUTPUT, "err"),
        ]

    def test_no_redirections(self):
        cmd = resolve(["ls", "-l"])
        assert cmd.argv == ["ls", "-l"]
        assert cmd.redirections == []

    def test_input_argv_untouched(self):
        argv = ["echo", "hi", ">", "f"]
        cmd = resolve(argv)
        assert argv == ["echo", "hi", ">", "f"]
        assert cmd.argv is not argv

    def test_missing_target(self):
        with pytest.raises(RedirectionError, match="missing redirection target"):
            resolve(["echo", "hi", ">"])

    def test_only_redirections(self):
        with pytest.raises(PipelineSyntaxError, match="missing command"):
            resolve([">", "out"])


class TestOpenRedirections:
    """Test opening targets into stream overrides."""

    def test_last_output_wins_all_created(self, tmp_path):
        first, second = tmp_path / "a", tmp_path / "b"
        cmd = resolve(["echo", ">", str(first), ">", str(second)])
        overrides = open_redirections(cmd)
        try:
            os.write(overrides.stdout, b"x")
        finally:
            overrides.close()
        assert first.read_bytes() == b""
        assert second.read_bytes() == b"x"

    def test_output_appends(self, tmp_path):
        target = tmp_path / "out"
        target.write_bytes(b"old\n")
        overrides = open_redirections(resolve(["echo", "2>", str(target)]))
        try:
            os.write(overrides.stderr, b"new\n")
        finally:
            overrides.close()
        assert target.read_bytes() == b"old\nnew\n"

    def test_input_is_read_only(self, tmp_path):
        source = tmp_path / "in"
        source.write_text("data\n")
        overrides = open_redirections(resolve(["cat", "<", str(source)]))
        try:
            flags = fcntl.fcntl(overrides.stdin, fcntl.F_GETFL)
            assert flags & os.O_ACCMODE == os.O_RDONLY
            assert overrides.stdout is None and overrides.stderr is None
        finally:
            overrides.close()

    def test_missing_input(self, tmp_path):
        with pytest.raises(RedirectionError, match="No such file"):
            open_redirections(resolve(["cat", "<", str(tmp_path / "nope")]))

    def test_null_byte_in_target(self, tmp_path):
        with pytest.raises(RedirectionError, match="embedded null byte"):
            open_redirections(resolve(["echo", ">", str(tmp_path / "a\x00b")]))

    def test_failure_closes_opened(self, tmp_path):
        out = tmp_path / "out"
        cmd = Command(["cat"], [
            Redirection(RedirectKind.OUTPUT, str(out)),
            Redirection(RedirectKind.INPUT, str(tmp_path / "nope")),
        ])
        before = set(os.listdir("/proc/self/fd"))
        with pytest.raises(RedirectionError):
            open_redirections(cmd)
        assert set(os.listdir("/proc/self/fd")) == before
        assert out.exists()
