"""
Aggregate commit events from many repositories into a per-day histogram.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Iterator

from localstats.dates import WINDOW_DAYS, day_index
from localstats.errors import RepositoryUnreadableError
from localstats.git_log import CommitEvent, read_commits

logger = logging.getLogger(__name__)

# Highest index the histogram can hold: window plus the largest offset
MAX_DAY_INDEX = WINDOW_DAYS + 7

LogSource = Callable[[str], Iterable[CommitEvent]]


class DayHistogram:
    """Commit counts per aligned day index, stored in a fixed-size array."""

    def __init__(self, size: int = MAX_DAY_INDEX + 1):
        self.counts = [0] * size

    def __len__(self) -> int:
        return len(self.counts)

    def __getitem__(self, index: int) -> int:
        return self.counts[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, DayHistogram):
            return NotImplemented
        return self.counts == other.counts

    def __repr__(self) -> str:
        return f"DayHistogram({self.nonzero()!r})"

    def increment(self, index: int, amount: int = 1) -> None:
        self.counts[index] += amount

    def merge(self, other: "DayHistogram") -> None:
        """Add another histogram's counts into this one, key by key."""
        for index, count in enumerate(other.counts):
            self.counts[index] += count

    def nonzero(self) -> dict[int, int]:
        """Return {index: count} for every non-empty day."""
        return {i: c for i, c in enumerate(self.counts) if c}

    def total(self) -> int:
        return sum(self.counts)

    @classmethod
    def from_counts(cls, counts: dict[int, int]) -> "DayHistogram":
        """Build a histogram from a sparse {index: count} mapping."""
        histogram = cls()
        for index, count in counts.items():
            histogram.increment(index, count)
        return histogram


@dataclass
class RepoFailure:
    """A repository that was skipped, and why."""

    path: str
    reason: str


@dataclass
class RepoResult:
    """Outcome of reading one repository."""

    path: str
    histogram: DayHistogram | None = None
    commits_counted: int = 0
    events_skipped: int = 0
    failure: RepoFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None


@dataclass
class AggregateResult:
    """Histogram for all readable repositories plus what was skipped."""

    histogram: DayHistogram = field(default_factory=DayHistogram)
    failures: list[RepoFailure] = field(default_factory=list)
    repos_read: int = 0
    commits_counted: int = 0
    events_skipped: int = 0


def _normalize_email(email: str) -> str:
    return (email or "").strip()


def aggregate_repo(
    path: str,
    target_email: str,
    now: datetime,
    log_source: LogSource = read_commits,
) -> RepoResult:
    """
    Count one repository's commits by the target author into a fresh histogram.

    A repository that fails part-way contributes nothing, so a rerun over the
    same data always gives the same result.
    """
    target = _normalize_email(target_email)
    histogram = DayHistogram()
    result = RepoResult(path=path)

    try:
        for event in log_source(path):
            if _normalize_email(event.author_email) != target:
                continue
            if event.timestamp is None:
                result.events_skipped += 1
                continue
            try:
                index = day_index(event.timestamp, now)
            except (TypeError, ValueError, OverflowError) as e:
                logger.debug("Skipping commit with bad timestamp in %s: %s", path, e)
                result.events_skipped += 1
                continue
            if index is None:
                continue
            histogram.increment(index)
            result.commits_counted += 1
    except RepositoryUnreadableError as e:
        logger.warning("Skipping repository %s: %s", path, e.reason)
        return RepoResult(path=path, failure=RepoFailure(path=path, reason=e.reason))

    result.histogram = histogram
    return result


def _iter_repo_results(
    repo_paths: list[str],
    target_email: str,
    now: datetime,
    log_source: LogSource,
    workers: int,
) -> Iterator[RepoResult]:
    if workers <= 1 or len(repo_paths) <= 1:
        for path in repo_paths:
            yield aggregate_repo(path, target_email, now, log_source)
        return

    # map() keeps input order, so failures are reported in path-list order
    with ThreadPoolExecutor(max_workers=workers) as executor:
        yield from executor.map(
            lambda p: aggregate_repo(p, target_email, now, log_source),
            repo_paths,
        )


def aggregate(
    repo_paths: Iterable[str],
    target_email: str,
    now: datetime,
    log_source: LogSource = read_commits,
    workers: int = 1,
) -> AggregateResult:
    """
    Build the day histogram for ``target_email`` across all repositories.

    Args:
        repo_paths: Repository paths, in the order they should be read
        target_email: Only commits by this author email are counted
        now: Reference instant for the window and alignment
        log_source: Callable returning the commit events of a path
        workers: Number of repositories to read concurrently

    Returns:
        AggregateResult with the merged histogram and any skipped repositories
    """
    result = AggregateResult()

    for repo_result in _iter_repo_results(list(repo_paths), target_email, now, log_source, workers):
        if not repo_result.ok:
            result.failures.append(repo_result.failure)
            continue
        result.histogram.merge(repo_result.histogram)
        result.repos_read += 1
        result.commits_counted += repo_result.commits_counted
        result.events_skipped += repo_result.events_skipped

    return result
