import logging
import os

from seashell.config import HISTORY_FILE, HISTORY_MODE, ENCODING, ENCODING_ERRORS
from seashell.errors import HistoryError

logger = logging.getLogger(__name__)


class History:
    """Append-only log of submitted lines, recreated for every session."""

    def __init__(self, path=HISTORY_FILE):
        self.path = path
        self._file = None

    def open(self):
        """Create a fresh (empty) history file."""
        try:
            fd = os.open(self.path, os.O_RDWR | os.O_CREAT | os.O_TRUNC, HISTORY_MODE)
            self._file = os.fdopen(fd, "r+", encoding=ENCODING, errors=ENCODING_ERRORS, newline="")
        except OSError as e:
            raise HistoryError(f"failed to open or create {self.path}: {e.strerror}") from e
        logger.debug("history file %s opened", self.path)
        return self

    def append(self, line):
        """Record one submitted line, keeping its line terminator."""
        self._check_open()
        if not line.endswith("\n"):
            line += "\n"
        try:
            self._file.seek(0, os.SEEK_END)
            self._file.write(line)
            self._file.flush()
        except (OSError, ValueError) as e:
            raise HistoryError(f"unable to write to {self.path}: {e}") from e

    def read_all(self):
        """Return the whole log as one string."""
        self._check_open()
        try:
            self._file.seek(0)
            return self._file.read()
        except (OSError, ValueError) as e:
            raise HistoryError(f"unable to read {self.path}: {e}") from e

    def _check_open(self):
        if self._file is None:
            raise HistoryError(f"{self.path} is not open")

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()
