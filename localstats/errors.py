"""
Exceptions raised by git-local-stats.
"""


class LocalStatsError(Exception):
    """Base exception for git-local-stats errors."""

    pass


class RepositoryUnreadableError(LocalStatsError):
    """A repository could not be opened or has no readable history."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class MalformedCommitTimestampError(LocalStatsError):
    """A commit carries a timestamp that cannot be turned into a datetime."""

    pass


class ConfigError(LocalStatsError, ValueError):
    """Required configuration is missing or invalid."""

    pass
