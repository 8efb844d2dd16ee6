"""Alias resolution engine.

Ties together the author parser, the name feed relations, the candidate
generator and the equivalence-class index to:

- build a canonical contributor roster from a batch of raw author strings
  (:meth:`AliasResolver.consolidate`), and
- map one raw author line to canonical representatives
  (:meth:`AliasResolver.deanonymize_author`).
"""

import re
from collections import defaultdict
from collections.abc import Iterable
from contextlib import AbstractContextManager, nullcontext

from authordedupe.audit.logger import AuditLogger
from authordedupe.candidates.generator import find_aliases_for_name
from authordedupe.clustering.equivalence import EquivalenceClassIndex
from authordedupe.clustering.mapping_store import MappingStore
from authordedupe.engine.config import ResolverConfig
from authordedupe.parse.author import parse_author, split_alias_line

__all__ = ["AliasResolver", "roster_sort_key", "split_coauthors"]

CONSOLIDATION_STAGE = "consolidation"
AUTHOR_LIST_STAGE = "author_list"

# "plus " as a word of its own, not the tail of "Surplus "
COAUTHOR_PREFIX_RE = re.compile(r"(?<!\w)plus ")
COAUTHOR_SEPARATORS = (" and ", " / ", " & ")
NAME_SEPARATOR = ", "
ROSTER_NAME_SEPARATOR = ","


def roster_sort_key(name: str) -> tuple[str, str]:
    """Sort key for stable roster output: case-insensitive, then exact."""
    return (name.casefold(), name)


def split_coauthors(raw_line: str, organization_suffixes: Iterable[str] = ()) -> list[str]:
    """Split an author line naming several people into single names.

    Parameters
    ----------
    raw_line : str
        Author line such as ``"Alice Liddell and Bob Builder"``.
    organization_suffixes : Iterable[str], optional
        Boilerplate to drop before splitting.

    Returns
    -------
    list[str]
        Stripped, non-empty names in line order.
    """
    text = COAUTHOR_PREFIX_RE.sub("", raw_line)
    # Suffixes may contain " and ", so they go before separator rewriting
    for suffix in organization_suffixes:
        text = text.replace(suffix, "")
    for separator in COAUTHOR_SEPARATORS:
        text = text.replace(separator, NAME_SEPARATOR)
    return [name.strip() for name in text.split(NAME_SEPARATOR) if name.strip()]


class AliasResolver:
    """Resolve author aliases to canonical identities.

    Attributes
    ----------
    config : ResolverConfig
        Resolution settings.
    store : MappingStore
        Name feed relations.
    index : EquivalenceClassIndex
        Known alias classes from the curated author list and previous merges.
    logger : AuditLogger | None
        Audit logger, if any.
    """

    def __init__(
        self,
        config: ResolverConfig | None = None,
        *,
        store: MappingStore | None = None,
        index: EquivalenceClassIndex | None = None,
        logger: AuditLogger | None = None,
    ) -> None:
        """Initialize resolver.

        Parameters
        ----------
        config : ResolverConfig | None, optional
            Resolution settings. If None, uses defaults.
        store : MappingStore | None, optional
            Preloaded name feed relations.
        index : EquivalenceClassIndex | None, optional
            Preloaded alias classes.
        logger : AuditLogger | None, optional
            Audit logger for tracking. If None, no logging.
        """
        self.config = config if config is not None else ResolverConfig()
        self.store = store if store is not None else MappingStore()
        self.index = index if index is not None else EquivalenceClassIndex()
        self.logger = logger

    def _stage(self, name: str) -> AbstractContextManager[dict[str, int]]:
        if self.logger:
            return self.logger.stage(name)
        return nullcontext({})

    def load_name_feed(self, lines: Iterable[str]) -> dict[str, int]:
        """Load a name feed into the mapping store.

        Raises
        ------
        NameFeedError
            On a record with an unknown tag.
        """
        return self.store.load_name_feed(lines, logger=self.logger)

    def initialize_from_author_list(self, lines: Iterable[str]) -> int:
        """Merge a curated author list into the index.

        Each line holds the known aliases of one person. Every alias and its
        parsed name, mail and login parts join a single class, so the
        curated roster overrides the heuristics.

        Parameters
        ----------
        lines : Iterable[str]
            Roster lines, aliases separated by ``;`` or ``,``.

        Returns
        -------
        int
            Number of lines merged.
        """
        merged_lines = 0
        with self._stage(AUTHOR_LIST_STAGE) as counters:
            for line in lines:
                parts: list[str] = []
                for alias in split_alias_line(line):
                    parts.extend(parse_author(alias).parts())
                if self.index.merge(parts) is not None:
                    merged_lines += 1

            counters.update(lines_merged=merged_lines, aliases_indexed=len(self.index))

        return merged_lines

    def find_aliases(self, raw_name: str) -> list[str]:
        """Return every alias candidate of one raw author string."""
        return find_aliases_for_name(raw_name, self.store, self.config)

    def add_author(self, raw_name: str) -> int | None:
        """Merge the alias candidates of one raw author string into the index."""
        return self.index.merge(self.find_aliases(raw_name))

    def deanonymize_author(self, raw_line: str) -> list[str]:
        """Resolve an author line to one canonical name per person.

        The line is split into individual names first (see
        :func:`split_coauthors`). For each name, the first alias candidate
        present in the index yields the first-inserted member of its class;
        names without an indexed candidate are returned trimmed.

        Parameters
        ----------
        raw_line : str
            Raw author line, possibly naming several people.

        Returns
        -------
        list[str]
            Canonical names in line order.

        Examples
        --------
            >>> resolver = AliasResolver()
            >>> resolver.initialize_from_author_list(["Jane Doe <jane@example.org>;jdoe"])
            1
            >>> resolver.deanonymize_author("jdoe")
            ['Jane Doe <jane@example.org>']
        """
        canonical_names: list[str] = []
        for name in split_coauthors(raw_line, self.config.organization_suffixes):
            canonical = name
            for alias in self.find_aliases(name):
                representative = self.index.representative(alias)
                if representative is not None:
                    canonical = representative
                    break
            canonical_names.append(canonical)
        return canonical_names

    def consolidate(
        self,
        raw_names: Iterable[str],
        *,
        update_index: bool = False,
    ) -> list[tuple[str, ...]]:
        """Group raw author strings that denote the same person.

        Every element may hold several comma-separated names. Each name's
        alias candidates are merged into a working copy of the index, then
        the distinct input names are partitioned by the class they ended up
        in.

        Parameters
        ----------
        raw_names : Iterable[str]
            Raw author strings.
        update_index : bool, optional
            Keep the merged index for later lookups instead of discarding
            it, by default False.

        Returns
        -------
        list[tuple[str, ...]]
            One tuple of raw names per person. Names inside a group and the
            groups themselves are sorted for stable output.
        """
        with self._stage(CONSOLIDATION_STAGE) as counters:
            working = self.index.copy()
            seen: dict[str, None] = {}

            for line in raw_names:
                for name in line.split(ROSTER_NAME_SEPARATOR):
                    name = name.strip()
                    if not name:
                        continue
                    seen.setdefault(name)
                    working.merge(self.find_aliases(name))

            by_class: dict[int | None, list[str]] = defaultdict(list)
            for name in seen:
                by_class[working.lookup(name)].append(name)

            groups = [tuple(sorted(names, key=roster_sort_key)) for names in by_class.values()]
            groups.sort(key=lambda group: [roster_sort_key(name) for name in group])

            counters.update(names_in=len(seen), groups_out=len(groups))

        if update_index:
            self.index = working

        return groups
