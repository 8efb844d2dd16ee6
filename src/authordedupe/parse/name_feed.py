"""Reader for name-mapping feeds.

A name feed links mail addresses and display names collected from a third
party. Each line is one ``;`` separated record:

- ``u2n;<mail>;...;<unused>;<name>=<unused>``: one mail, one name
- ``n2u;<unused>;<name>;<unused>;<mail1>=...;<mail2>=...``: one name, many mails
- ``m2m;<unused>;<mail_a>;<mail_b>``: two mails of the same person
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum

__all__ = [
    "FeedRecord",
    "FeedRecordKind",
    "NameFeedError",
    "SkippedRecord",
    "parse_name_feed",
]

FIELD_SEPARATOR = ";"
VALUE_SEPARATOR = "="

U2N_MIN_FIELDS = 5
N2U_MIN_FIELDS = 5
M2M_MIN_FIELDS = 4


class FeedRecordKind(StrEnum):
    """Record tags of the name feed."""

    MAIL_TO_NAME = "u2n"
    NAME_TO_MAIL = "n2u"
    MAIL_TO_MAIL = "m2m"


class NameFeedError(ValueError):
    """Raised when the name feed contains a record with an unknown tag."""

    def __init__(self, message: str, line_number: int | None = None) -> None:
        """Initialize name feed error.

        Parameters
        ----------
        message : str
            Error message.
        line_number : int | None, optional
            1-based line of the offending record.
        """
        super().__init__(message)
        self.line_number = line_number


@dataclass(frozen=True)
class FeedRecord:
    """One usable name feed record.

    Attributes
    ----------
    kind : FeedRecordKind
        Record tag.
    line_number : int
        1-based line number in the feed.
    names : tuple[str, ...]
        Display names named by the record.
    mails : tuple[str, ...]
        Mail addresses named by the record.
    """

    kind: FeedRecordKind
    line_number: int
    names: tuple[str, ...] = field(default_factory=tuple)
    mails: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SkippedRecord:
    """A record dropped because its field count is unusable."""

    kind: FeedRecordKind
    line_number: int
    field_count: int
    reason: str


def _value_before_marker(value: str) -> str:
    return value.split(VALUE_SEPARATOR, 1)[0].strip()


def _parse_line(line: str, line_number: int) -> FeedRecord | SkippedRecord | None:
    if not line.strip():
        return None

    fields = line.rstrip("\r\n").split(FIELD_SEPARATOR)
    tag = fields[0]

    try:
        kind = FeedRecordKind(tag)
    except ValueError:
        raise NameFeedError(
            f"The name feed contains an invalid line start {tag!r} (line {line_number})",
            line_number=line_number,
        ) from None

    if kind is FeedRecordKind.MAIL_TO_NAME:
        if len(fields) < U2N_MIN_FIELDS:
            return SkippedRecord(kind, line_number, len(fields), "missing_name")
        mail = fields[1].strip()
        name = _value_before_marker(fields[4])
        if not mail or not name:
            return SkippedRecord(kind, line_number, len(fields), "empty_value")
        return FeedRecord(kind, line_number, names=(name,), mails=(mail,))

    if kind is FeedRecordKind.NAME_TO_MAIL:
        if len(fields) < N2U_MIN_FIELDS:
            return SkippedRecord(kind, line_number, len(fields), "missing_mail")
        name = fields[2].strip()
        mails = tuple(m for m in (_value_before_marker(f) for f in fields[4:]) if m)
        if not name or not mails:
            return SkippedRecord(kind, line_number, len(fields), "empty_value")
        return FeedRecord(kind, line_number, names=(name,), mails=mails)

    if len(fields) < M2M_MIN_FIELDS:
        return SkippedRecord(kind, line_number, len(fields), "missing_mail")
    mail_a = fields[2].strip()
    mail_b = fields[3].strip()
    if not mail_a or not mail_b:
        return SkippedRecord(kind, line_number, len(fields), "empty_value")
    return FeedRecord(kind, line_number, mails=(mail_a, mail_b))


def parse_name_feed(lines: Iterable[str]) -> Iterator[FeedRecord | SkippedRecord]:
    """Parse name feed lines into records.

    Blank lines are ignored. Records with too few fields are yielded as
    :class:`SkippedRecord` so callers can report them.

    Parameters
    ----------
    lines : Iterable[str]
        Feed lines (trailing newlines allowed).

    Yields
    ------
    FeedRecord | SkippedRecord
        One entry per non-blank line.

    Raises
    ------
    NameFeedError
        On the first record with an unknown tag.
    """
    for line_number, line in enumerate(lines, start=1):
        parsed = _parse_line(line, line_number)
        if parsed is not None:
            yield parsed
