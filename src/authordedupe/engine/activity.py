"""Contributor activity over a commit history.

Newcomer detection (first commit of every contributor) and per-month counts
of active and new contributors, both over deanonymized author names.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime

from authordedupe.engine.resolver import AliasResolver
from authordedupe.parse.git_log import Commit

__all__ = [
    "MonthlyActivity",
    "Newcomer",
    "count_monthly_activity",
    "find_newcomers",
    "format_commit_date",
]

MONTH_FORMAT = "%Y-%m"


@dataclass(frozen=True)
class Newcomer:
    """A contributor's first appearance in the history.

    Attributes
    ----------
    author : str
        Canonical author name.
    first_commit : datetime
        Date of the contributor's first commit.
    """

    author: str
    first_commit: datetime


@dataclass(frozen=True)
class MonthlyActivity:
    """Contributor counts for one calendar month (UTC).

    Attributes
    ----------
    month : str
        Month as ``YYYY-MM``.
    active : int
        Distinct contributors with at least one commit in the month.
    newcomers : int
        Contributors whose first commit falls in the month.
    """

    month: str
    active: int
    newcomers: int


def format_commit_date(date: datetime) -> str:
    """Render a commit date as UTC ``YYYY-MM-DD HH:MM:SSZ``."""
    return date.astimezone(UTC).strftime("%Y-%m-%d %H:%M:%SZ")


def _authors_of(commit: Commit, resolver: AliasResolver | None) -> list[str]:
    if resolver is None:
        return [commit.author]
    return resolver.deanonymize_author(commit.author)


def find_newcomers(
    commits: Iterable[Commit],
    resolver: AliasResolver | None = None,
) -> list[Newcomer]:
    """Find the first commit of every contributor.

    Parameters
    ----------
    commits : Iterable[Commit]
        Commits in chronological order.
    resolver : AliasResolver | None, optional
        Resolver mapping raw authors to canonical names. If None, raw author
        strings are compared as they are.

    Returns
    -------
    list[Newcomer]
        Newcomers in order of their first commit.
    """
    known: set[str] = set()
    newcomers: list[Newcomer] = []

    for commit in commits:
        for author in _authors_of(commit, resolver):
            if author not in known:
                known.add(author)
                newcomers.append(Newcomer(author=author, first_commit=commit.date))

    return newcomers


def count_monthly_activity(
    commits: Iterable[Commit],
    resolver: AliasResolver | None = None,
) -> list[MonthlyActivity]:
    """Count active and new contributors per month.

    Parameters
    ----------
    commits : Iterable[Commit]
        Commits in chronological order.
    resolver : AliasResolver | None, optional
        Resolver mapping raw authors to canonical names.

    Returns
    -------
    list[MonthlyActivity]
        One entry per month with commits, sorted by month.
    """
    known: set[str] = set()
    active: dict[str, set[str]] = {}
    new: dict[str, int] = {}

    for commit in commits:
        month = commit.date.astimezone(UTC).strftime(MONTH_FORMAT)
        month_authors = active.setdefault(month, set())
        new.setdefault(month, 0)
        for author in _authors_of(commit, resolver):
            month_authors.add(author)
            if author not in known:
                known.add(author)
                new[month] += 1

    return [
        MonthlyActivity(month=month, active=len(active[month]), newcomers=new[month])
        for month in sorted(active)
    ]
