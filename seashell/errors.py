class ShellError(Exception):
    """Base class for errors reported by the interpreter."""


class PipelineSyntaxError(ShellError):
    """Line could not be split into runnable stages."""


class RedirectionError(ShellError):
    """Redirection operator without target, or target could not be opened."""


class HistoryError(ShellError):
    """History file could not be created, written or read. Fatal."""
