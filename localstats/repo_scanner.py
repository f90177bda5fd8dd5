"""
Find Git repositories below a folder.
"""

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

# Directories that never hold repositories worth tracking
EXCLUDED_DIRS = {"vendor", "node_modules"}


def scan_folder(root: str | Path, exclude_dirs: set[str] | None = None) -> list[str]:
    """
    Recursively find Git working trees under ``root``.

    Args:
        root: Folder to walk
        exclude_dirs: Directory names to skip, in addition to .git.
            Defaults to EXCLUDED_DIRS.

    Returns:
        Absolute repository paths in sorted walk order
    """
    if exclude_dirs is None:
        exclude_dirs = EXCLUDED_DIRS

    root = Path(root).expanduser().resolve()
    found: list[str] = []

    def onerror(err: OSError) -> None:
        logger.debug("Cannot read %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=onerror):
        if ".git" in dirnames or ".git" in filenames:
            found.append(str(Path(dirpath)))

        # Sorted so the stored order is stable between scans
        dirnames[:] = sorted(d for d in dirnames if d != ".git" and d not in exclude_dirs)

    return found
