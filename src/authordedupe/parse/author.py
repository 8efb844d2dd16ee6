"""Structural parsing of raw author strings.

A raw author string looks like ``Display Name [login] <mail@domain>`` where
every part is optional. Parsing never fails: when no structural pattern
matches, the whole string becomes the mail part (if it looks like an address)
or the name part.
"""

import re
from dataclasses import dataclass
from functools import lru_cache

__all__ = [
    "ParsedAuthor",
    "parse_author",
    "split_alias_line",
    "clear_parse_cache",
]

# U+FFFD is the substitution character left behind by broken encodings
NAME_RE = re.compile(r"^(?P<name>[\w \-?.'\uFFFD]+[\w?])(?:[ <]|$)")
# " -?" is a character range (space to question mark), kept as is
LOGIN_RE = re.compile(r"^(?P<name>[\w -?.]+) (?:\[|\():?(?P<login>\w+)(?:\)|\])( <|$)")
MAIL_RE = re.compile(r"<(?P<mail>[^>]+)>?$")

ALIAS_LINE_SEPARATORS_RE = re.compile(r"[;,]")

PARSE_CACHE_SIZE = 4096


@dataclass(frozen=True)
class ParsedAuthor:
    """Semantic parts of one raw author string.

    Attributes
    ----------
    raw : str
        The string as it was given.
    name : str | None
        Leading display name.
    login : str | None
        Login handle from a ``[login]`` or ``(login)`` group behind a name.
    mail : str | None
        Mail address from a trailing ``<...>`` group, or the whole string.
    """

    raw: str
    name: str | None = None
    login: str | None = None
    mail: str | None = None

    def parts(self) -> list[str]:
        """Return the raw string followed by every present part."""
        return [self.raw] + [p for p in (self.name, self.mail, self.login) if p is not None]


def _parse(raw: str) -> ParsedAuthor:
    name_match = NAME_RE.match(raw)
    login_match = LOGIN_RE.match(raw)
    mail_match = MAIL_RE.search(raw)

    if not (name_match or login_match or mail_match):
        if "@" in raw and " " not in raw:
            return ParsedAuthor(raw=raw, mail=raw.strip("<>"))
        return ParsedAuthor(raw=raw, name=raw)

    return ParsedAuthor(
        raw=raw,
        name=name_match.group("name") if name_match else None,
        login=login_match.group("login") if login_match else None,
        mail=mail_match.group("mail") if mail_match else None,
    )


_cached_parse = lru_cache(maxsize=PARSE_CACHE_SIZE)(_parse)


def parse_author(raw: str) -> ParsedAuthor:
    """Parse a raw author string into name, login and mail parts.

    Results are memoized per raw string.

    Parameters
    ----------
    raw : str
        Raw author string, e.g. ``"Jane Doe [jdoe] <jane@example.org>"``.

    Returns
    -------
    ParsedAuthor
        Parsed parts; absent parts are None.

    Examples
    --------
        >>> parse_author("Jane Doe <jane@example.org>").mail
        'jane@example.org'
        >>> parse_author("jane@example.org").name is None
        True
    """
    return _cached_parse(raw)


def clear_parse_cache() -> None:
    """Drop every memoized parse result."""
    _cached_parse.cache_clear()


def split_alias_line(line: str) -> list[str]:
    """Split a curated roster line into its aliases.

    Parameters
    ----------
    line : str
        Aliases of one person separated by ``;`` or ``,``.

    Returns
    -------
    list[str]
        Stripped, non-empty aliases in line order.
    """
    return [alias.strip() for alias in ALIAS_LINE_SEPARATORS_RE.split(line) if alias.strip()]
