import os
import sys

import psutil

BANNER = r"""########################################################

           _.-''|''-._
        .-'     |     `-.
      .'\       |       /`.
    .'   \      |      /   `.
    \     \     |     /     /
     `\    \    |    /    /'
       `\   \   |   /   /'
         `\  \  |  /  /'
        _.-`\ \ | / /'-._
       {_____`\|//'_____}
               `-'

                    _          _ _
                   | |        | | |
 ___  ___  __ _ ___| |__   ___| | |
/ __|/ _ \/ _` / __| '_ \ / _ \ | |
\__ \  __/ (_| \__ \ | | |  __/ | |
|___/\___|\__,_|___/_| |_|\___|_|_|

Author: Jeremy Butt (c)2020
########################################################"""

RULE = "#" * 56


def builtin_cd(args, session):
    """Change the interpreter's working directory. Failures are not fatal."""
    if not args:
        print('seashell: command "cd" expects argument', file=sys.stderr)
        return 0
    try:
        os.chdir(args[0])
    except OSError as e:
        print(f"seashell: unable to cd...: {e.strerror}", file=sys.stderr)
    except ValueError as e:
        print(f"seashell: unable to cd...: {e}", file=sys.stderr)
    return 0


def builtin_info(args, session):
    """Print banner and a short environment summary"""
    print(BANNER)
    print(f"USER is: @{os.getenv('USER') or os.getenv('USERNAME') or ''}")
    print(RULE)
    print(f"CWD: {os.getcwd()}")
    print(RULE)
    try:
        proc = psutil.Process(session.pid)
        rss_mb = round(proc.memory_info().rss / (1024 * 1024), 2)
        print(f"PID: {session.pid}  RSS: {rss_mb} MB")
    except (psutil.NoSuchProcess, psutil.AccessDenied):
        print(f"PID: {session.pid}")
    print(RULE)
    return 0


def builtin_history(args, session):
    """Write the whole history log to stdout"""
    sys.stdout.write(session.history.read_all())
    sys.stdout.flush()
    return 0


def builtin_exit(args, session):
    sys.exit(0)


BUILTINS = {
    'cd': builtin_cd,
    'info': builtin_info,
    'history': builtin_history,
    'exit': builtin_exit,
}


def run_builtin(argv, session):
    """
    Execute a built-in inside the interpreter process.
    Returns: exit status
    """
    return BUILTINS[argv[0]](argv[1:], session)
