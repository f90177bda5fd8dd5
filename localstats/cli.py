"""
CLI display functions for git-local-stats.
"""

import math
import sys
from datetime import datetime, timedelta
from typing import TextIO

from localstats.aggregator import AggregateResult, RepoFailure
from localstats.dates import WINDOW_DAYS, alignment_offset, start_of_day
from localstats.styles import Band, StyleFunc, ansi_style, band_for

# Oldest week index is WEEKS_IN_WINDOW - 1, newest is 0
WEEKS_IN_WINDOW = math.ceil((WINDOW_DAYS + 7) / 7)

MONTH_ABBREVS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Only every other weekday is labelled to keep the left edge readable
DAY_LABELS = {1: "Mon", 3: "Wed", 5: "Fri"}
LABEL_WIDTH = 5

# Narrowest cell holds three digits, like "123"
MIN_CELL_DIGITS = 3


def cell_width(grid: dict[int, list[int]]) -> int:
    """Digits needed by the widest count in the grid (at least MIN_CELL_DIGITS)."""
    widest = max((v for column in grid.values() for v in column), default=0)
    return max(MIN_CELL_DIGITS, len(str(widest)))


def format_cell(value: int, width: int, style: StyleFunc, today: bool = False) -> str:
    """
    Format one day's count as a fixed-width, styled cell.

    Args:
        value: Commit count for the day
        width: Digits reserved for the count
        style: Style function applied to the padded text
        today: Highlight the cell as the current day

    Returns:
        Styled text, ``width + 1`` visible characters wide
    """
    band = Band.TODAY if today else band_for(value)
    text = "-" if value == 0 else str(value)
    return style(band, f"{text:>{width}} ")


def format_day_label(row: int) -> str:
    """Return the left label for a weekday row, blank for unlabelled rows."""
    label = DAY_LABELS.get(row, "")
    return f" {label:<{LABEL_WIDTH - 1}}"


def format_month_header(now: datetime, width: int) -> str:
    """
    Build the month label row shown above the grid.

    Steps through the window a week at a time and prints a short month name
    the first time a step lands in a new month.
    """
    day = start_of_day(now) - timedelta(days=WINDOW_DAYS)
    month = day.month
    header = " " * LABEL_WIDTH

    while True:
        if day.month != month:
            header += f"{MONTH_ABBREVS[day.month - 1]:<{width}} "
            month = day.month
        else:
            header += " " * (width + 1)

        day += timedelta(days=7)
        if day > now:
            break

    return header.rstrip()


def render_lines(grid: dict[int, list[int]], now: datetime, style: StyleFunc = ansi_style) -> list[str]:
    """
    Lay out the heatmap as text lines, oldest week on the left.

    Args:
        grid: Week columns from calendar_folder.fold()
        now: Reference instant, used for the today cell and month labels
        style: Style function for cells (ansi_style or plain_style)

    Returns:
        List of lines: the month header followed by 7 weekday rows
    """
    width = cell_width(grid)
    today_row = alignment_offset(now) - 1
    lines = [format_month_header(now, width)]

    for row in range(7):
        line = format_day_label(row)
        for week in range(WEEKS_IN_WINDOW - 1, -1, -1):
            column = grid.get(week, [])
            value = column[row] if row < len(column) else 0
            is_today = week == 0 and row == today_row
            line += format_cell(value, width, style, today=is_today)
        lines.append(line)

    return lines


def render(
    grid: dict[int, list[int]],
    now: datetime,
    style: StyleFunc = ansi_style,
    out: TextIO | None = None,
) -> None:
    """Print the heatmap to stdout (or ``out``)."""
    stream = out if out is not None else sys.stdout
    for line in render_lines(grid, now, style):
        print(line, file=stream)
    print(file=stream)


def display_summary(result: AggregateResult, email: str) -> None:
    """
    Print totals for the rendered window.

    Args:
        result: Aggregation result behind the heatmap
        email: Author email the heatmap was built for
    """
    commits = result.commits_counted
    repos = result.repos_read
    commit_word = "commit" if commits == 1 else "commits"
    repo_word = "repository" if repos == 1 else "repositories"
    print(f"📊 {commits} {commit_word} by {email} in the last {WINDOW_DAYS} days across {repos} {repo_word}")
    print()


def display_warnings(failures: list[RepoFailure]) -> None:
    """Print one line per skipped repository."""
    if not failures:
        return
    print(f"Skipped {len(failures)} repositor{'y' if len(failures) == 1 else 'ies'}:")
    for failure in failures:
        print(f"  ⚠️  {failure.path}: {failure.reason}")
    print()


def display_scan_results(found: list[str], added: int) -> None:
    """
    Print the repositories found by a folder scan.

    Args:
        found: Absolute paths of discovered repositories
        added: How many of them were not stored before
    """
    for path in found:
        print(f"  {path}")

    repo_word = "repository" if len(found) == 1 else "repositories"
    print(f"\nFound {len(found)} {repo_word}, {added} new.")
    print()


def display_repo_list(paths: list[str]) -> None:
    """Print the stored repository paths."""
    if not paths:
        print("No repositories stored yet. Add some with --add FOLDER.")
        print()
        return

    print(f"Tracking {len(paths)} {'repository' if len(paths) == 1 else 'repositories'}:")
    for path in paths:
        print(f"  {path}")
    print()
