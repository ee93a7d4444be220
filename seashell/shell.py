import logging
import os
import sys

from seashell.builtin import builtin_info
from seashell.config import HISTORY_FILE, LOG_LEVEL, ENCODING, ENCODING_ERRORS
from seashell.errors import ShellError, HistoryError
from seashell.executor import execute_pipeline
from seashell.history import History
from seashell.parser import parse_line, is_blank
from seashell.redirection import resolve
from seashell.session import ShellSession
from seashell.signals import init_signal_handlers

logger = logging.getLogger(__name__)


def prompt():
    """Generate shell prompt"""
    return f"\n{os.getcwd()}$ "


def read_line():
    """
    Show the prompt and read one line from stdin.
    Returns: the line, or None at end of input
    """
    sys.stdout.write(prompt())
    sys.stdout.flush()
    line = sys.stdin.readline()
    return line or None


def run_line(line, session):
    """
    Tokenize, resolve and execute one input line.
    Returns: PipelineResult
    """
    commands = [resolve(argv) for argv in parse_line(line)]
    return execute_pipeline(commands, session)


def main_loop(session):
    """Main shell loop"""
    while True:
        line = read_line()
        if line is None:
            print()
            break
        if is_blank(line):
            continue

        try:
            run_line(line, session)
        except HistoryError:
            raise
        except ShellError as e:
            logger.debug("pipeline aborted: %r", e)
            print(f"seashell: {e}", file=sys.stderr)
        finally:
            # recorded after it ran, so `history` lists earlier lines only
            session.history.append(line)


def setup_logging(level=LOG_LEVEL):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
    root = logging.getLogger("seashell")
    if not root.handlers:
        root.addHandler(handler)
    if not isinstance(logging.getLevelName(level), int):
        print(f"seashell: unknown log level {level!r}, using WARNING", file=sys.stderr)
        level = "WARNING"
    root.setLevel(level)


def setup_streams():
    """Let lines carrying non-UTF-8 bytes pass through unchanged."""
    for stream in (sys.stdin, sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding=ENCODING, errors=ENCODING_ERRORS)


def main(history_file=HISTORY_FILE):
    setup_streams()
    setup_logging()

    history = History(history_file)
    try:
        history.open()
    except HistoryError as e:
        print(f"seashell: {e}", file=sys.stderr)
        return 1

    session = ShellSession(history)
    init_signal_handlers(session)

    try:
        builtin_info([], session)
        main_loop(session)
    except HistoryError as e:
        print(f"seashell: {e}", file=sys.stderr)
        return 1
    finally:
        history.close()
    return 0
