import logging
import os
import subprocess
import sys
from dataclasses import dataclass, field

from seashell.builtin import BUILTINS, run_builtin
from seashell.config import COMMAND_NOT_FOUND
from seashell.redirection import open_redirections
from seashell.signals import child_role, interrupts_deferred

logger = logging.getLogger(__name__)


@dataclass
class ChildHandle:
    """A spawned stage that has not been waited on yet."""
    process: subprocess.Popen
    stage_index: int

    @property
    def pid(self):
        return self.process.pid


@dataclass
class StageOutcome:
    stage_index: int
    name: str
    status: int
    spawned: bool = True

    @property
    def signaled(self):
        return self.status < 0

    @property
    def not_found(self):
        return self.status == COMMAND_NOT_FOUND


@dataclass
class PipelineResult:
    outcomes: list = field(default_factory=list)
    builtin: bool = False

    @property
    def status(self):
        return self.outcomes[-1].status if self.outcomes else 0


def report(outcome, last):
    """Print the exit report for one stage."""
    if outcome.signaled:
        print(f"UNKNOWN: exited with code {-outcome.status}")
    elif outcome.status == 0:
        if last:
            print("The program exited with code 0")
    elif outcome.not_found:
        print(f"The program {outcome.name} does not exist")
    else:
        print(f"ERROR: Error code: {outcome.status}")


def _close(fd):
    if fd is None:
        return
    try:
        os.close(fd)
    except OSError as e:
        logger.debug("close(%d) failed: %s", fd, e)


def spawn_stage(command, stdin, stdout, stderr):
    """
    Launch one stage with the given descriptors (None = inherit).
    Returns: Popen object, or None if the program could not be launched
    """
    try:
        return subprocess.Popen(
            command.argv,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            close_fds=True,
            preexec_fn=child_role,
        )
    except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
        logger.debug("%s: cannot launch: %s", command.name, e)
        return None
    except ValueError as e:
        # embedded null byte in argv
        logger.debug("%r: cannot launch: %s", command.name, e)
        return None
    except OSError as e:
        logger.warning("%s: failed to execute: %s", command.name, e)
        return None


def execute_pipeline(commands, session):
    """
    Run resolved commands as one pipeline.

    Every stage is spawned before any is waited on; the parent closes its
    copy of each pipe end as soon as the stage using it exists.
    Returns: PipelineResult
    """
    if len(commands) == 1 and commands[0].name in BUILTINS:
        command = commands[0]
        status = run_builtin(command.argv, session)
        return PipelineResult([StageOutcome(0, command.name, status, spawned=False)], builtin=True)

    overrides = []
    try:
        for command in commands:
            overrides.append(open_redirections(command))
    except BaseException:
        for o in overrides:
            o.close()
        raise

    # keep our own buffered output ahead of the children's
    sys.stdout.flush()
    sys.stderr.flush()

    n = len(commands)
    handles, outcomes = [], [None] * n
    prev_read = read_end = write_end = None
    try:
        for i, command in enumerate(commands):
            if i < n - 1:
                read_end, write_end = os.pipe()

            ov = overrides[i]
            stdin = ov.stdin if ov.stdin is not None else prev_read
            stdout = ov.stdout if ov.stdout is not None else write_end
            with interrupts_deferred():
                proc = spawn_stage(command, stdin, stdout, ov.stderr)
                if proc is not None:
                    session.child_spawned()
                    handles.append(ChildHandle(proc, i))

            if proc is None:
                outcomes[i] = StageOutcome(i, command.name, COMMAND_NOT_FOUND, spawned=False)
            else:
                logger.debug("stage %d: %s spawned as pid %d", i, command.name, proc.pid)

            # the stage holds its own copies now
            _close(write_end)
            _close(prev_read)
            ov.close()
            prev_read, read_end, write_end = read_end, None, None
    finally:
        for fd in (prev_read, read_end, write_end):
            _close(fd)
        for o in overrides:
            o.close()
        for handle in handles:
            _wait(handle, commands, outcomes, session)

    result = PipelineResult(outcomes)
    for outcome in outcomes:
        report(outcome, last=outcome.stage_index == n - 1)
    return result


def _wait(handle, commands, outcomes, session):
    status = handle.process.wait()
    session.child_reaped()
    i = handle.stage_index
    outcomes[i] = StageOutcome(i, commands[i].name, status)
    logger.debug("stage %d: pid %d finished with %d", i, handle.pid, status)
