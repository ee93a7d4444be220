import logging
import os
import signal
import sys
from contextlib import contextmanager

from seashell.config import INTERRUPTED

logger = logging.getLogger(__name__)


def make_interpreter_handler(session):
    """
    Build the SIGINT handler for the interpreter process.

    No stage running: leave with the interrupted status.
    Stages running: swallow it; the terminal already delivered SIGINT
    to the whole foreground group, so the stages get it directly.
    """
    def handle_sigint(signum, frame):
        if not session.is_interpreter():
            # forked, child handler not installed yet
            os._exit(INTERRUPTED)
        if session.live_children == 0:
            sys.exit(INTERRUPTED)
        logger.debug("SIGINT absorbed, %d stage(s) running", session.live_children)

    return handle_sigint


@contextmanager
def interrupts_deferred():
    """
    Hold SIGINT back until the block ends. Wraps a spawn and its
    bookkeeping so the handler never sees a running stage left uncounted.
    """
    previous = signal.pthread_sigmask(signal.SIG_BLOCK, {signal.SIGINT})
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, previous)


def init_signal_handlers(session):
    """Install the interpreter-role handler. Must run before the first spawn."""
    signal.signal(signal.SIGINT, make_interpreter_handler(session))


def child_role():
    """
    Runs in each spawned stage between fork and exec.
    Back to the default disposition: an interrupt kills the stage outright,
    before or after exec. The blocked mask inherited from the parent is lifted.
    """
    signal.signal(signal.SIGINT, signal.SIG_DFL)
    signal.pthread_sigmask(signal.SIG_UNBLOCK, {signal.SIGINT})
