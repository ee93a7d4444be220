import re

from seashell.config import PIPE, DELIMITERS
from seashell.errors import PipelineSyntaxError

_SPLIT_ARGS = re.compile("[" + re.escape(DELIMITERS) + "]+")


def split_stages(line):
    """
    Split a raw line on the pipe operator.
    Returns: list of stage strings
    """
    line = line.rstrip("\r\n")
    stages = line.split(PIPE)
    for stage in stages:
        if not stage.strip(DELIMITERS):
            raise PipelineSyntaxError("empty pipeline stage")
    return stages


def split_args(stage):
    """Split one stage string into its argument vector. No quoting is interpreted."""
    return [tok for tok in _SPLIT_ARGS.split(stage) if tok]


def is_blank(line):
    return not line.strip(DELIMITERS)


def parse_line(line):
    """
    Parse one input line into pipeline stages.
    Returns: list of argv lists, one per stage
    """
    return [split_args(stage) for stage in split_stages(line)]
