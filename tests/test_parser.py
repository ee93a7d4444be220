"""Tests for splitting input lines into stages and argument vectors."""

import pytest

from seashell.errors import PipelineSyntaxError
from seashell.parser import parse_line, split_args, split_stages, is_blank


class TestSplitStages:
    """Test splitting on the pipe operator."""

    def test_single_stage(self):
        assert split_stages("ls -l\n") == ["ls -l"]

    def test_three_stages(self):
        assert split_stages("a | b|c") == ["a ", " b", "c"]

    @pytest.mark.parametrize("line", ["ls | | wc", "ls |", "| ls", "ls |  \t |wc\n"])
    def test_empty_stage_rejected(self, line):
        with pytest.raises(PipelineSyntaxError, match="empty pipeline stage"):
            split_stages(line)


class TestSplitArgs:
    """Test whitespace/control splitting inside a stage."""

    def test_mixed_delimiters(self):
        assert split_args(" ls\t-l \a /tmp\r\n") == ["ls", "-l", "/tmp"]

    def test_quotes_are_not_special(self):
        assert split_args('echo "a b" a"b"') == ["echo", '"a', 'b"', 'a"b"']


class TestParseLine:
    def test_pipeline(self):
        assert parse_line("seq 3 | sort -r | head -1\n") == [
            ["seq", "3"], ["sort", "-r"], ["head", "-1"],
        ]

    def test_stages_do_not_share_storage(self):
        first, second = parse_line("echo a | echo a")
        first.append("x")
        assert second == ["echo", "a"]

    def test_blank(self):
        assert is_blank(" \t\n")
        assert not is_blank(" ls\n")
