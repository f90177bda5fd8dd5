"""
Tests for CLI display functions.
"""

import io
from contextlib import redirect_stdout
from datetime import datetime, timezone

from localstats.aggregator import AggregateResult, DayHistogram, RepoFailure
from localstats.calendar_folder import fold
from localstats.cli import (
    WEEKS_IN_WINDOW,
    cell_width,
    display_repo_list,
    display_scan_results,
    display_summary,
    display_warnings,
    format_cell,
    format_month_header,
    render,
    render_lines,
)
from localstats.styles import Band, plain_style

UTC = timezone.utc

# A Wednesday, alignment offset 4
WEDNESDAY = datetime(2026, 1, 21, 12, 0, tzinfo=UTC)
SUNDAY = datetime(2026, 1, 25, 12, 0, tzinfo=UTC)


def mark_today(band: Band, text: str) -> str:
    """Style that brackets the today cell and leaves the rest plain."""
    if band is Band.TODAY:
        return f"[{text.strip()}]"
    return text


def grid_for(counts: dict[int, int]) -> dict[int, list[int]]:
    return fold(DayHistogram.from_counts(counts))


class TestFormatCell:
    """Tests for single cell formatting."""

    def test_zero_is_a_dash(self):
        assert format_cell(0, 3, plain_style) == "  - "

    def test_values_are_right_aligned(self):
        assert format_cell(5, 3, plain_style) == "  5 "
        assert format_cell(12, 3, plain_style) == " 12 "
        assert format_cell(123, 3, plain_style) == "123 "

    def test_today_band_overrides_value_band(self):
        bands = []

        def record(band, text):
            bands.append(band)
            return text

        text = format_cell(12, 3, record, today=True)
        assert bands == [Band.TODAY]
        assert text == " 12 "


class TestCellWidth:
    """Tests for the grid-wide cell width."""

    def test_minimum_three_digits(self):
        assert cell_width(grid_for({})) == 3
        assert cell_width(grid_for({4: 99})) == 3

    def test_widens_for_large_counts(self):
        assert cell_width(grid_for({4: 1234})) == 4

    def test_rows_stay_aligned_with_wide_counts(self):
        lines = render_lines(grid_for({4: 1234}), WEDNESDAY, plain_style)
        assert len({len(line) for line in lines[1:]}) == 1
        assert len(lines[1]) == 5 + WEEKS_IN_WINDOW * 5


class TestMonthHeader:
    """Tests for the month label row."""

    def test_months_in_order(self):
        header = format_month_header(WEDNESDAY, 3)
        months = ["Aug", "Sep", "Oct", "Nov", "Dec", "Jan"]
        positions = [header.index(m) for m in months]
        assert positions == sorted(positions)

    def test_starting_month_is_not_labelled(self):
        """The window starts in July; the label appears only on a month change."""
        assert "Jul" not in format_month_header(WEDNESDAY, 3)

    def test_each_month_labelled_once(self):
        header = format_month_header(WEDNESDAY, 3)
        assert header.count("Oct") == 1

    def test_labels_line_up_with_cells(self):
        header = format_month_header(WEDNESDAY, 3)
        # Label column plus whole cells before the first label
        assert (header.index("Aug") - 5) % 4 == 0


class TestRenderLines:
    """Tests for the heatmap layout."""

    def test_header_plus_seven_rows(self):
        lines = render_lines(grid_for({}), WEDNESDAY, plain_style)
        assert len(lines) == 8

    def test_row_width(self):
        lines = render_lines(grid_for({}), WEDNESDAY, plain_style)
        for line in lines[1:]:
            assert len(line) == 5 + WEEKS_IN_WINDOW * 4

    def test_weekday_labels(self):
        lines = render_lines(grid_for({}), WEDNESDAY, plain_style)
        rows = lines[1:]
        assert rows[1].startswith(" Mon ")
        assert rows[3].startswith(" Wed ")
        assert rows[5].startswith(" Fri ")
        for index in (0, 2, 4, 6):
            assert rows[index].startswith("     ")

    def test_today_highlighted_on_wednesday(self):
        """Offset 4 puts today at position 3 of week 0, the newest column."""
        lines = render_lines(grid_for({4: 3, 5: 0, 11: 7}), WEDNESDAY, mark_today)
        rows = lines[1:]

        assert rows[3].endswith("[3]")
        assert sum(row.count("[") for row in rows) == 1

    def test_today_highlighted_without_commits(self):
        lines = render_lines(grid_for({}), WEDNESDAY, mark_today)
        assert lines[4].endswith("[-]")

    def test_today_on_sunday_is_last_row(self):
        """Sunday has offset 7; the current column is shorter, so the cell shows empty."""
        lines = render_lines(grid_for({}), SUNDAY, mark_today)
        assert lines[7].endswith("[-]")

    def test_older_weeks_on_the_left(self):
        # Index 11 is week 1 position 4, second column from the right
        lines = render_lines(grid_for({11: 7}), WEDNESDAY, plain_style)
        assert lines[5].endswith("  7   - ")

    def test_oldest_week_in_first_column(self):
        lines = render_lines(grid_for({189: 8}), WEDNESDAY, plain_style)
        # Week 27, position 0: first cell after the label column
        assert lines[1][5:9] == "  8 "

    def test_rendering_is_repeatable(self):
        grid = grid_for({4: 3, 11: 7, 40: 12})
        assert render_lines(grid, WEDNESDAY) == render_lines(grid, WEDNESDAY)


class TestRender:
    """Tests for printing the heatmap."""

    def test_writes_to_stream(self):
        out = io.StringIO()
        render(grid_for({4: 1}), WEDNESDAY, plain_style, out=out)
        text = out.getvalue()
        assert text.count("\n") == 9
        assert " Wed " in text

    def test_defaults_to_stdout(self):
        output = io.StringIO()
        with redirect_stdout(output):
            render(grid_for({}), WEDNESDAY, plain_style)
        assert " Mon " in output.getvalue()


class TestDisplaySummary:
    """Tests for the totals line."""

    def test_plural(self):
        result = AggregateResult(repos_read=2, commits_counted=5)
        output = io.StringIO()
        with redirect_stdout(output):
            display_summary(result, "me@example.com")
        text = output.getvalue()
        assert "5 commits by me@example.com" in text
        assert "2 repositories" in text

    def test_singular(self):
        result = AggregateResult(repos_read=1, commits_counted=1)
        output = io.StringIO()
        with redirect_stdout(output):
            display_summary(result, "me@example.com")
        text = output.getvalue()
        assert "1 commit " in text
        assert "1 repository" in text


class TestDisplayWarnings:
    """Tests for skipped repository output."""

    def test_no_failures_prints_nothing(self):
        output = io.StringIO()
        with redirect_stdout(output):
            display_warnings([])
        assert output.getvalue() == ""

    def test_lists_each_failure(self):
        failures = [
            RepoFailure(path="/a", reason="no commits"),
            RepoFailure(path="/b", reason="not a git repository"),
        ]
        output = io.StringIO()
        with redirect_stdout(output):
            display_warnings(failures)
        text = output.getvalue()
        assert "Skipped 2 repositories" in text
        assert "/a: no commits" in text
        assert "/b: not a git repository" in text


class TestDisplayRepoLists:
    """Tests for scan and list output."""

    def test_scan_results(self):
        output = io.StringIO()
        with redirect_stdout(output):
            display_scan_results(["/code/a", "/code/b"], added=1)
        text = output.getvalue()
        assert "/code/a" in text
        assert "Found 2 repositories, 1 new." in text

    def test_empty_repo_list(self):
        output = io.StringIO()
        with redirect_stdout(output):
            display_repo_list([])
        assert "No repositories stored yet" in output.getvalue()

    def test_repo_list(self):
        output = io.StringIO()
        with redirect_stdout(output):
            display_repo_list(["/code/a"])
        text = output.getvalue()
        assert "Tracking 1 repository" in text
        assert "/code/a" in text
