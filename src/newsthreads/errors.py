"""Exception types raised by newsthreads."""


class NewsThreadsError(Exception):
    """Base class for all newsthreads errors."""


class ConfigError(NewsThreadsError):
    """The configuration file is missing, unreadable or malformed."""


class ResourceError(NewsThreadsError):
    """A per-language resource file could not be read or parsed."""


class ParseError(NewsThreadsError):
    """A document could not be parsed into tokens."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
