"""
git-local-stats: a contribution graph for your local repositories

Entry point for the application.
"""

import argparse
import logging
import sqlite3
import time
from datetime import datetime

from colorama import init as colorama_init

from localstats import config
from localstats.aggregator import aggregate
from localstats.calendar_folder import fold
from localstats.cli import display_repo_list, display_scan_results, display_summary, display_warnings, render
from localstats.errors import ConfigError
from localstats.repo_scanner import scan_folder
from localstats.storage import RepoStore
from localstats.styles import ansi_style, plain_style


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="git-local-stats",
        description="Show a GitHub-style contribution graph of your local Git commits.",
    )
    p.add_argument("--add", metavar="FOLDER", default="", help="Scan FOLDER for Git repositories and remember them.")
    p.add_argument("--email", default=None, help="Author email to count commits for (default: $GITSTATS_EMAIL).")
    p.add_argument("--list", action="store_true", help="List the repositories being tracked.")
    p.add_argument("--remove", metavar="PATH", default="", help="Stop tracking the repository at PATH.")
    p.add_argument("--db", default=None, help="Repository list database (default: $GITSTATS_DB_PATH or ~/.git-local-stats/repos.db).")
    p.add_argument("--workers", type=int, default=1, help="Read this many repositories in parallel.")
    p.add_argument("--no-color", action="store_true", help="Print the graph without ANSI colors.")
    p.add_argument("--timing", action="store_true", help="Print how long the run took.")
    p.add_argument("--verbose", action="store_true", help="Log debug details to stderr.")
    return p


def _scan(store: RepoStore, folder: str) -> int:
    print(f"\nScanning {folder} for Git repositories...\n")
    found = scan_folder(folder, config.get_exclude_dirs())
    added = store.add_paths(found)
    display_scan_results(found, added)
    return 0


def _remove(store: RepoStore, path: str) -> int:
    if store.remove_path(path):
        print(f"Stopped tracking {path}")
        return 0
    print(f"Not tracked: {path}")
    return 1


def _stats(store: RepoStore, email: str, now: datetime, use_color: bool, workers: int) -> int:
    paths = store.list_paths()
    if not paths:
        print("No repositories to display. Add some with --add FOLDER.")
        return 0

    print(f"\nReading {len(paths)} repositories for {email}...\n")
    result = aggregate(paths, email, now, workers=workers)

    grid = fold(result.histogram)
    render(grid, now, style=ansi_style if use_color else plain_style)
    display_summary(result, email)
    display_warnings(result.failures)
    return 0


def main(argv: list[str] | None = None, now: datetime | None = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    print("git-local-stats - Your local contribution graph")
    print("-" * 50)

    started = time.perf_counter()
    if now is None:
        now = datetime.now().astimezone()

    try:
        store = RepoStore(args.db)

        if args.add:
            code = _scan(store, args.add)
        elif args.remove:
            code = _remove(store, args.remove)
        elif args.list:
            display_repo_list(store.list_paths())
            code = 0
        else:
            email = config.validate_config(args.email)
            use_color = not (args.no_color or config.NO_COLOR)
            code = _stats(store, email, now, use_color, max(1, args.workers))
    except ConfigError as e:
        print(f"\nConfiguration Error:\n{e}")
        return 1
    except sqlite3.Error as e:
        print(f"\nError: could not read the repository list: {e}")
        return 1

    if args.timing:
        print(f"Done in {time.perf_counter() - started:.3f}s")

    return code


def run() -> None:
    colorama_init()
    raise SystemExit(main())


if __name__ == "__main__":
    run()
