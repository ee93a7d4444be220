import logging
import os
from dataclasses import dataclass, field
from enum import Enum

from seashell.config import REDIRECT_OUT, REDIRECT_ERR, REDIRECT_IN, OUTPUT_MODE
from seashell.errors import PipelineSyntaxError, RedirectionError

logger = logging.getLogger(__name__)


class RedirectKind(Enum):
    OUTPUT = "stdout"
    ERROR_OUTPUT = "stderr"
    INPUT = "stdin"


OPERATORS = {
    REDIRECT_OUT: RedirectKind.OUTPUT,
    REDIRECT_ERR: RedirectKind.ERROR_OUTPUT,
    REDIRECT_IN: RedirectKind.INPUT,
}


@dataclass(frozen=True)
class Redirection:
    kind: RedirectKind
    target: str


@dataclass
class Command:
    """One pipeline stage: cleaned argv plus the redirections taken out of it."""
    argv: list
    redirections: list = field(default_factory=list)

    @property
    def name(self):
        return self.argv[0]


@dataclass
class StreamOverrides:
    """Raw descriptors replacing a stage's piped or inherited streams."""
    stdin: int = None
    stdout: int = None
    stderr: int = None

    def fds(self):
        return [fd for fd in (self.stdin, self.stdout, self.stderr) if fd is not None]

    def close(self):
        for fd in self.fds():
            try:
                os.close(fd)
            except OSError as e:
                logger.debug("close(%d) failed: %s", fd, e)
        self.stdin = self.stdout = self.stderr = None


def resolve(argv):
    """
    Take redirection operators and their targets out of argv.
    Returns: Command with a fresh argv (order of the remaining tokens kept)
    """
    args, redirections = [], []
    i = 0
    while i < len(argv):
        tok = argv[i]
        kind = OPERATORS.get(tok)
        if kind is None:
            args.append(tok)
            i += 1
            continue
        if i + 1 >= len(argv):
            raise RedirectionError(f"missing redirection target after '{tok}'")
        redirections.append(Redirection(kind, argv[i + 1]))
        i += 2

    if not args:
        raise PipelineSyntaxError("missing command")
    return Command(args, redirections)


def _open_target(redirection):
    if redirection.kind is RedirectKind.INPUT:
        flags = os.O_RDONLY
    else:
        flags = os.O_WRONLY | os.O_CREAT | os.O_APPEND
    try:
        return os.open(redirection.target, flags, OUTPUT_MODE)
    except OSError as e:
        raise RedirectionError(f"{redirection.target}: {e.strerror}") from e
    except ValueError as e:
        raise RedirectionError(f"{redirection.target!r}: {e}") from e


def open_redirections(command):
    """
    Open every redirection target of a command, in order.
    The last redirection of each kind wins; earlier ones are opened
    (output files get created) and closed again.
    Returns: StreamOverrides
    """
    overrides = StreamOverrides()
    try:
        for redirection in command.redirections:
            fd = _open_target(redirection)
            attr = redirection.kind.value
            previous = getattr(overrides, attr)
            if previous is not None:
                os.close(previous)
            setattr(overrides, attr, fd)
            logger.debug("%s: %s -> fd %d", command.name, redirection.kind.name, fd)
    except BaseException:
        overrides.close()
        raise
    return overrides
