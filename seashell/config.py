import os
import signal

HISTORY_FILE = os.path.expanduser(
    os.getenv("SEASHELL_HISTORY", "~/.seashell_history")
)
HISTORY_MODE = 0o640

# bytes that are not valid UTF-8 survive the round trip
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

LOG_LEVEL = os.getenv("SEASHELL_LOG_LEVEL", "WARNING").upper()

# Tokens
PIPE = "|"
DELIMITERS = " \t\r\n\a"
REDIRECT_OUT = ">"
REDIRECT_ERR = "2>"
REDIRECT_IN = "<"
OUTPUT_MODE = 0o640

# Exit statuses
COMMAND_NOT_FOUND = 255
INTERRUPTED = 128 + signal.SIGINT
