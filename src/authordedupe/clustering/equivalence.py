"""Equivalence-class index over alias strings."""

from collections.abc import Iterable, Iterator


def alias_key(alias: str) -> str:
    """Return the case-insensitive lookup key for *alias*."""
    return alias.casefold()


class EquivalenceClassIndex:
    """Partition of alias strings into disjoint equivalence classes.

    Classes live in an arena and are addressed by integer ids. Every alias
    key points to exactly one class id, and merging a set of aliases fuses
    every class any of them already belongs to. Keys are compared
    case-insensitively; the first spelling seen for a key is kept as the
    member.

    Attributes
    ----------
    class_of : dict[str, int]
        Alias key to class id.
    class_members : dict[int, dict[str, str]]
        Class id to ordered ``{alias key: spelling}`` members.
    """

    def __init__(self) -> None:
        """Initialize empty index."""
        self.class_of: dict[str, int] = {}
        self.class_members: dict[int, dict[str, str]] = {}
        self._next_id = 0

    def merge(self, aliases: Iterable[str]) -> int | None:
        """Merge *aliases* into one class, fusing every class they touch.

        The surviving class is the oldest one involved. Its members keep
        class-age order, followed by the new aliases in input order.

        Parameters
        ----------
        aliases : Iterable[str]
            Aliases known to denote the same person. Blank strings are ignored.

        Returns
        -------
        int | None
            Id of the merged class, or None if no alias was given.
        """
        new_members: dict[str, str] = {}
        for alias in aliases:
            if alias and alias.strip():
                new_members.setdefault(alias_key(alias), alias)

        if not new_members:
            return None

        touched = sorted({self.class_of[key] for key in new_members if key in self.class_of})

        if touched:
            survivor = touched[0]
            merged = self.class_members[survivor]
            for class_id in touched[1:]:
                for key, spelling in self.class_members.pop(class_id).items():
                    merged.setdefault(key, spelling)
        else:
            survivor = self._next_id
            self._next_id += 1
            merged = {}
            self.class_members[survivor] = merged

        for key, spelling in new_members.items():
            merged.setdefault(key, spelling)

        for key in merged:
            self.class_of[key] = survivor

        return survivor

    def lookup(self, alias: str) -> int | None:
        """Return the class id *alias* belongs to, or None."""
        return self.class_of.get(alias_key(alias))

    def members(self, class_id: int) -> tuple[str, ...]:
        """Return the members of a class in insertion order.

        Raises
        ------
        KeyError
            If *class_id* is not a live class.
        """
        return tuple(self.class_members[class_id].values())

    def aliases_of(self, alias: str) -> tuple[str, ...]:
        """Return every member of the class holding *alias* (empty if unknown)."""
        class_id = self.lookup(alias)
        if class_id is None:
            return ()
        return self.members(class_id)

    def representative(self, alias: str) -> str | None:
        """Return the first-inserted member of the class holding *alias*."""
        members = self.aliases_of(alias)
        return members[0] if members else None

    def classes(self) -> list[tuple[str, ...]]:
        """Return all classes, oldest first."""
        return [tuple(members.values()) for _, members in sorted(self.class_members.items())]

    def copy(self) -> "EquivalenceClassIndex":
        """Return an independent copy of the index."""
        clone = EquivalenceClassIndex()
        clone.class_of = dict(self.class_of)
        clone.class_members = {cid: dict(members) for cid, members in self.class_members.items()}
        clone._next_id = self._next_id
        return clone

    def __contains__(self, alias: object) -> bool:
        return isinstance(alias, str) and alias_key(alias) in self.class_of

    def __len__(self) -> int:
        return len(self.class_of)

    def __iter__(self) -> Iterator[str]:
        for members in self.class_members.values():
            yield from members.values()
