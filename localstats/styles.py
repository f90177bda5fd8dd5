"""
Intensity bands and terminal styles for heatmap cells.
"""

from enum import Enum
from typing import Callable

from colorama import Back, Fore, Style


class Band(Enum):
    """Visual weight of a heatmap cell."""

    EMPTY = "empty"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    TODAY = "today"


def band_for(count: int) -> Band:
    """
    Pick the intensity band for a day's commit count.

    Args:
        count: Number of commits for the day

    Returns:
        EMPTY for 0, LOW for 1-4, MEDIUM for 5-9, HIGH for 10 or more
    """
    if count <= 0:
        return Band.EMPTY
    elif count < 5:
        return Band.LOW
    elif count < 10:
        return Band.MEDIUM
    else:
        return Band.HIGH


StyleFunc = Callable[[Band, str], str]

ANSI_CODES = {
    Band.EMPTY: Style.NORMAL + Fore.BLACK,
    Band.LOW: Style.BRIGHT + Fore.BLACK + Back.WHITE,
    Band.MEDIUM: Style.BRIGHT + Fore.BLACK + Back.YELLOW,
    Band.HIGH: Style.BRIGHT + Fore.BLACK + Back.GREEN,
    Band.TODAY: Style.BRIGHT + Fore.WHITE + Back.MAGENTA,
}


def ansi_style(band: Band, text: str) -> str:
    """Wrap ``text`` in the ANSI colors of ``band``."""
    return f"{ANSI_CODES[band]}{text}{Style.RESET_ALL}"


def plain_style(band: Band, text: str) -> str:
    """Return ``text`` unchanged, for terminals without color."""
    return text
