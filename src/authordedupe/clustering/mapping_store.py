"""Specialized mail/name relations built from a name feed."""

from collections import Counter
from collections.abc import Iterable
from contextlib import nullcontext

from authordedupe.audit.logger import AuditLogger
from authordedupe.clustering.equivalence import EquivalenceClassIndex, alias_key
from authordedupe.parse.name_feed import (
    FeedRecord,
    FeedRecordKind,
    SkippedRecord,
    parse_name_feed,
)

__all__ = ["MappingStore"]

STAGE_NAME = "name_feed"


def _link(mapping: dict[str, dict[str, str]], key: str, value: str) -> bool:
    """Add *value* under *key* in a case-insensitive multi-map.

    Returns
    -------
    bool
        True if the key existed already and the value was new.
    """
    values = mapping.get(alias_key(key))
    if values is None:
        mapping[alias_key(key)] = {alias_key(value): value}
        return False
    if alias_key(value) in values:
        return False
    values[alias_key(value)] = value
    return True


class MappingStore:
    """Four mail/name relations seeding aliases the git log cannot reveal.

    ``mail_to_name`` and ``name_to_mail`` are multi-maps; ``mail_to_mail``
    and ``name_to_name`` are equivalence partitions. Linking a mail to a
    name keeps them consistent: names sharing a mail become aliases of each
    other, and mails sharing a name become aliases of each other.

    Attributes
    ----------
    mail_to_name : dict[str, dict[str, str]]
        Mail key to linked names.
    name_to_mail : dict[str, dict[str, str]]
        Name key to linked mails.
    mail_to_mail : EquivalenceClassIndex
        Mails known to belong to one person.
    name_to_name : EquivalenceClassIndex
        Names known to belong to one person.
    """

    def __init__(self) -> None:
        """Initialize empty store."""
        self.mail_to_name: dict[str, dict[str, str]] = {}
        self.name_to_mail: dict[str, dict[str, str]] = {}
        self.mail_to_mail = EquivalenceClassIndex()
        self.name_to_name = EquivalenceClassIndex()

    def link_mail_and_name(self, mail: str, name: str) -> None:
        """Link a mail address to a display name, propagating consistency."""
        if _link(self.mail_to_name, mail, name):
            self.name_to_name.merge(self.mail_to_name[alias_key(mail)].values())

        if _link(self.name_to_mail, name, mail):
            self.mail_to_mail.merge(self.name_to_mail[alias_key(name)].values())

    def link_mails(self, mail: str, alternative_mail: str) -> None:
        """Record two mail addresses as belonging to the same person."""
        self.mail_to_mail.merge([mail, alternative_mail])

    def add_record(self, record: FeedRecord) -> None:
        """Apply one parsed feed record."""
        if record.kind is FeedRecordKind.MAIL_TO_MAIL:
            self.link_mails(*record.mails)
            return
        for name in record.names:
            for mail in record.mails:
                self.link_mail_and_name(mail, name)

    def load_name_feed(
        self,
        lines: Iterable[str],
        *,
        logger: AuditLogger | None = None,
    ) -> dict[str, int]:
        """Load every record of a name feed.

        Parameters
        ----------
        lines : Iterable[str]
            Feed lines.
        logger : AuditLogger | None, optional
            Audit logger; the load is logged as the ``name_feed`` stage and
            skipped records as WARN events.

        Returns
        -------
        dict[str, int]
            Counters: records per tag and ``skipped``.

        Raises
        ------
        NameFeedError
            On a record with an unknown tag. Records before it stay loaded.
        """
        counters: Counter[str] = Counter()

        with logger.stage(STAGE_NAME) if logger else nullcontext({}) as stage_counters:
            for entry in parse_name_feed(lines):
                if isinstance(entry, SkippedRecord):
                    counters["skipped"] += 1
                    if logger:
                        logger.feed_record_skipped(
                            entry.line_number, entry.kind.value, entry.field_count, entry.reason
                        )
                    continue

                self.add_record(entry)
                counters[entry.kind.value] += 1

            result = {kind.value: counters[kind.value] for kind in FeedRecordKind}
            result["skipped"] = counters["skipped"]
            stage_counters.update(result)

        return result

    def names_for_mail(self, mail: str) -> list[str]:
        """Return the names linked to *mail*."""
        return list(self.mail_to_name.get(alias_key(mail), {}).values())

    def mails_for_name(self, name: str) -> list[str]:
        """Return the mails linked to *name*."""
        return list(self.name_to_mail.get(alias_key(name), {}).values())

    def alias_mails(self, mail: str) -> list[str]:
        """Return the other mails of the person owning *mail*."""
        key = alias_key(mail)
        return [m for m in self.mail_to_mail.aliases_of(mail) if alias_key(m) != key]

    def alias_names(self, name: str) -> list[str]:
        """Return the other names of the person called *name*."""
        key = alias_key(name)
        return [n for n in self.name_to_name.aliases_of(name) if alias_key(n) != key]
