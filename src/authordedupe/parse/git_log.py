"""Reader for plain ``git log`` exports.

Only the ``Author:`` and ``Date:`` header lines are used. git writes the
newest commit first, so the log is walked in reverse to produce commits in
chronological order.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime

__all__ = ["Commit", "GitLogError", "parse_git_date", "read_commits"]

AUTHOR_PREFIX = "Author: "
DATE_PREFIX = "Date: "

# git's default date format first, then --date=iso
GIT_DATE_FORMATS = (
    "%a %b %d %H:%M:%S %Y %z",
    "%Y-%m-%d %H:%M:%S %z",
    "%Y-%m-%dT%H:%M:%S%z",
)


class GitLogError(ValueError):
    """Raised when the git log is structurally inconsistent."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize git log error.

        Parameters
        ----------
        message : str
            Error message.
        line_number : int | None, optional
            1-based line number in the log.
        """
        super().__init__(message if line_number is None else f"{message} (line {line_number})")
        self.line_number = line_number


@dataclass(frozen=True)
class Commit:
    """Author and date of one commit.

    Attributes
    ----------
    author : str
        Raw author string from the ``Author:`` line.
    date : datetime
        Timezone-aware commit date.
    """

    author: str
    date: datetime


def parse_git_date(text: str) -> datetime:
    """Parse a git date header value.

    Raises
    ------
    ValueError
        If none of the known formats matches.
    """
    value = text.strip()
    for date_format in GIT_DATE_FORMATS:
        try:
            return datetime.strptime(value, date_format)
        except ValueError:
            continue
    raise ValueError(f"Unrecognized git date: {value!r}")


def read_commits(lines: Sequence[str]) -> Iterator[Commit]:
    """Yield commits of a git log in chronological order.

    Parameters
    ----------
    lines : Sequence[str]
        All lines of the log, newest commit first.

    Yields
    ------
    Commit
        One entry per ``Author:`` line, oldest first.

    Raises
    ------
    GitLogError
        On two dates without an author in between, an author without a
        date, or an unparseable date.
    """
    pending_date: datetime | None = None
    total = len(lines)

    for offset, raw_line in enumerate(reversed(lines)):
        line_number = total - offset
        line = raw_line.rstrip("\r\n")

        if line.startswith(DATE_PREFIX):
            if pending_date is not None:
                raise GitLogError("Two dates without author in between", line_number)
            try:
                pending_date = parse_git_date(line[len(DATE_PREFIX) :])
            except ValueError as e:
                raise GitLogError(str(e), line_number) from e

        elif line.startswith(AUTHOR_PREFIX):
            if pending_date is None:
                raise GitLogError("Author without date", line_number)
            yield Commit(author=line[len(AUTHOR_PREFIX) :].strip(), date=pending_date)
            pending_date = None
