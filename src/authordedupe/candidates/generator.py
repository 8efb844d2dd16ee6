"""Alias candidate generation for one raw author string.

Combines the structural parts of the string with the name feed relations
to produce every string hypothesized to denote the same person.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from authordedupe.clustering.equivalence import alias_key
from authordedupe.parse.author import parse_author

if TYPE_CHECKING:
    from authordedupe.clustering.mapping_store import MappingStore
    from authordedupe.engine.config import ResolverConfig

MAIL_LOCAL_SEPARATOR = "@"
MAIL_TAG_SEPARATOR = "+"


class _CandidateSet:
    """Insertion-ordered, case-insensitive set of candidates."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def add(self, candidate: str) -> None:
        if candidate:
            self._items.setdefault(alias_key(candidate), candidate)

    def to_list(self) -> list[str]:
        return list(self._items.values())


def find_aliases_for_name(
    raw_name: str,
    store: MappingStore,
    config: ResolverConfig,
) -> list[str]:
    """Compute every alias candidate of *raw_name*.

    Parameters
    ----------
    raw_name : str
        One raw author string (a single person).
    store : MappingStore
        Name feed relations.
    config : ResolverConfig
        Supplies the common-name filter.

    Returns
    -------
    list[str]
        Case-insensitively distinct candidates, starting with *raw_name*.
    """
    candidates = _CandidateSet()
    candidates.add(raw_name)

    author = parse_author(raw_name)

    if author.mail is not None:
        mail = author.mail
        candidates.add(mail)

        local_part = mail.split(MAIL_LOCAL_SEPARATOR)[0]
        if not config.is_name_very_common(local_part):
            candidates.add(local_part)

        # user+tag@domain delivers to user@domain
        if MAIL_TAG_SEPARATOR in local_part:
            untagged = local_part.split(MAIL_TAG_SEPARATOR)[0]
            if not config.is_name_very_common(untagged):
                candidates.add(untagged)

        for name in store.names_for_mail(mail):
            candidates.add(name)
        for alternative_mail in store.alias_mails(mail):
            candidates.add(alternative_mail)

    if author.name is not None and not config.is_name_very_common(author.name):
        candidates.add(author.name)
        for alternative_name in store.alias_names(author.name):
            candidates.add(alternative_name)
        for mail in store.mails_for_name(author.name):
            candidates.add(mail)

    if author.login is not None:
        candidates.add(author.login)

    return candidates.to_list()
