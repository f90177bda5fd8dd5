"""
Read commit events from local Git repositories.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterator

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from localstats.errors import MalformedCommitTimestampError, RepositoryUnreadableError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitEvent:
    """A single commit as seen by the aggregator."""

    timestamp: datetime | None  # None when the commit's date could not be decoded
    author_email: str


def open_repository(path: str | Path) -> Repo:
    """
    Open the repository at ``path``.

    Raises:
        RepositoryUnreadableError: If the path is missing or not a repository
    """
    try:
        return Repo(str(path))
    except NoSuchPathError:
        raise RepositoryUnreadableError(str(path), "path does not exist")
    except InvalidGitRepositoryError:
        raise RepositoryUnreadableError(str(path), "not a git repository")


def commit_timestamp(commit) -> datetime:
    """
    Return the author time of a GitPython commit as an aware datetime.

    Raises:
        MalformedCommitTimestampError: If the stored date is out of range
    """
    try:
        return commit.authored_datetime
    except (ValueError, OverflowError, OSError) as e:
        raise MalformedCommitTimestampError(f"{commit.hexsha[:7]}: {e}")


def read_commits(path: str | Path) -> Iterator[CommitEvent]:
    """
    Lazily yield the commit events reachable from HEAD.

    Args:
        path: Repository working tree

    Yields:
        CommitEvent for each commit, newest first

    Raises:
        RepositoryUnreadableError: If the repository cannot be opened, has no
            commits, or git fails while the log is read
    """
    repo = open_repository(path)
    try:
        if not repo.head.is_valid():
            raise RepositoryUnreadableError(str(path), "no commits")

        for commit in repo.iter_commits("HEAD"):
            try:
                timestamp = commit_timestamp(commit)
            except MalformedCommitTimestampError as e:
                logger.debug("Unreadable commit date in %s: %s", path, e)
                timestamp = None
            yield CommitEvent(timestamp=timestamp, author_email=commit.author.email or "")
    except (GitCommandError, ValueError) as e:
        raise RepositoryUnreadableError(str(path), f"git log failed: {e}")
    finally:
        repo.close()
