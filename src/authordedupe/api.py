"""Public API for resolving contributor aliases.

This module provides the file-level entry points of authordedupe:
- Building a resolver from a name feed and a curated author list
- Consolidating raw author strings into a roster file
- Finding newcomers and monthly activity in a git log export
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Sequence
from pathlib import Path

from authordedupe.audit.logger import AuditLogger
from authordedupe.engine.activity import (
    MonthlyActivity,
    Newcomer,
    count_monthly_activity,
    find_newcomers,
    format_commit_date,
)
from authordedupe.engine.config import ResolverConfig
from authordedupe.engine.resolver import AliasResolver, split_coauthors
from authordedupe.parse.git_log import read_commits

__all__ = [
    "consolidate_file",
    "load_resolver",
    "read_lines",
    "scan_activity",
    "scan_newcomers",
    "seed_from_git_log",
    "write_activity_csv",
    "write_author_list",
    "write_newcomers_csv",
]

CSV_DELIMITER = ";"
ROSTER_SEPARATOR = ";"


def read_lines(path: str | Path) -> list[str]:
    """Read a UTF-8 text file into lines without line terminators.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return file_path.read_text(encoding="utf-8").splitlines()


def load_resolver(
    name_feed: str | Path | None = None,
    author_list: str | Path | None = None,
    *,
    config: ResolverConfig | None = None,
    logger: AuditLogger | None = None,
) -> AliasResolver:
    """Build a resolver from optional name feed and author list files.

    Parameters
    ----------
    name_feed : str | Path | None, optional
        Name feed file (``u2n``/``n2u``/``m2m`` records).
    author_list : str | Path | None, optional
        Curated author list, one person per line.
    config : ResolverConfig | None, optional
        Resolution settings. If None, uses defaults.
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.

    Returns
    -------
    AliasResolver
        Ready resolver.

    Raises
    ------
    FileNotFoundError
        If a given file does not exist.
    NameFeedError
        If the name feed contains an unknown record tag.

    Examples
    --------
        >>> from authordedupe import load_resolver
        >>> resolver = load_resolver(author_list="authors.txt")
        >>> resolver.deanonymize_author("jdoe and Alice")
    """
    resolver = AliasResolver(config, logger=logger)

    if logger:
        logger.event("resolver_configured", data=resolver.config.to_dict())

    if name_feed is not None:
        resolver.load_name_feed(read_lines(name_feed))

    if author_list is not None:
        resolver.initialize_from_author_list(read_lines(author_list))

    return resolver


def consolidate_file(path: str | Path, resolver: AliasResolver) -> list[tuple[str, ...]]:
    """Consolidate every raw author string of a file (one per line)."""
    return resolver.consolidate(read_lines(path))


def write_author_list(groups: Iterable[Sequence[str]], path: str | Path) -> None:
    """Write alias groups as a roster: one ``;`` joined group per line.

    The output can be fed back through
    :meth:`AliasResolver.initialize_from_author_list`.
    """
    file_path = Path(path)

    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        for group in groups:
            f.write(ROSTER_SEPARATOR.join(group) + "\n")


def scan_newcomers(path: str | Path, resolver: AliasResolver | None = None) -> list[Newcomer]:
    """Find the first commit of every contributor in a git log export.

    Raises
    ------
    GitLogError
        If the log is structurally inconsistent.
    """
    return find_newcomers(read_commits(read_lines(path)), resolver)


def scan_activity(
    path: str | Path, resolver: AliasResolver | None = None
) -> list[MonthlyActivity]:
    """Count active and new contributors per month in a git log export."""
    return count_monthly_activity(read_commits(read_lines(path)), resolver)


def seed_from_git_log(resolver: AliasResolver, path: str | Path) -> int:
    """Index the authors of a git log export when no curated list exists.

    Every co-author of every commit is consolidated into the resolver's own
    index, oldest commit first, so the earliest spelling of a person becomes
    canonical and name feed links join the log's spellings.

    Returns
    -------
    int
        Number of distinct contributors found.

    Raises
    ------
    GitLogError
        If the log is structurally inconsistent.
    """
    suffixes = resolver.config.organization_suffixes
    names = [
        name
        for commit in read_commits(read_lines(path))
        for name in split_coauthors(commit.author, suffixes)
    ]
    return len(resolver.consolidate(names, update_index=True))


def write_newcomers_csv(newcomers: Iterable[Newcomer], path: str | Path) -> int:
    """Write newcomers as ``author;date`` CSV and return the row count."""
    file_path = Path(path)
    rows = 0

    with file_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, delimiter=CSV_DELIMITER, lineterminator="\n")
        writer.writerow(["author", "date"])
        for newcomer in newcomers:
            writer.writerow([newcomer.author, format_commit_date(newcomer.first_commit)])
            rows += 1

    return rows


def write_activity_csv(months: Iterable[MonthlyActivity], path: str | Path) -> int:
    """Write monthly activity as ``month;active;newcomers`` CSV."""
    file_path = Path(path)
    rows = 0

    with file_path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, delimiter=CSV_DELIMITER, lineterminator="\n")
        writer.writerow(["month", "active", "newcomers"])
        for month in months:
            writer.writerow([month.month, month.active, month.newcomers])
            rows += 1

    return rows
