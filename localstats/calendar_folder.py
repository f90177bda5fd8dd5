"""
Fold the day histogram into week columns for the heatmap.
"""

from localstats.aggregator import MAX_DAY_INDEX, DayHistogram


def fold(histogram: DayHistogram) -> dict[int, list[int]]:
    """
    Group day indexes into weeks.

    Walks indexes 1..MAX_DAY_INDEX in order. A column starts at every index
    divisible by 7 and is stored once its sixth weekday position is reached,
    or when the walk ends.

    Args:
        histogram: Commit counts per day index

    Returns:
        Dict mapping week index (index // 7, 0 = current week) to that week's
        counts. The current week's column may hold fewer than 7 values.
    """
    grid: dict[int, list[int]] = {}
    column: list[int] = []
    week = 0

    for index in range(1, MAX_DAY_INDEX + 1):
        week = index // 7
        position = index % 7
        if position == 0:
            column = []

        column.append(histogram[index] if index < len(histogram) else 0)

        if position == 6:
            grid[week] = column
            column = []

    if column:
        grid[week] = column

    return grid
