"""Resolver configuration dataclass."""

from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, replace
from typing import Any

# First names and system accounts shared by too many people to identify anyone
DEFAULT_COMMON_NAMES: frozenset[str] = frozenset(
    {
        "chris",
        "philipp",
        "raymond",
        "robert",
        "stephen",
        "thomas",
        "anton",
        "bernd",
        "benjamin",
        "brandon",
        "marco",
        "martin",
        "steve",
        "daniel",
        "michael",
        "derek",
        "david",
        "jason",
        "grzegorz",
        "simon",
        "andrew",
        "richard",
        "scott",
        "steph",
        "tyler",
        "github",
        "admin",
        "bugzilla",
        "mozilla",
        "bugmail",
    }
)

DEFAULT_ORGANIZATION_SUFFIXES: tuple[str, ...] = ("and the rest of the Xiph.Org Foundation",)


@dataclass
class ResolverConfig:
    """Configuration for alias resolution.

    Attributes
    ----------
    min_alias_length : int
        Tokens shorter than this never form aliases on their own (default: 5).
    common_names : frozenset[str]
        Stoplist of first names and system accounts, compared case-insensitively.
    organization_suffixes : tuple[str, ...]
        Boilerplate removed from author lines before splitting co-authors.
    """

    min_alias_length: int = 5
    common_names: frozenset[str] = field(default_factory=lambda: DEFAULT_COMMON_NAMES)
    organization_suffixes: tuple[str, ...] = DEFAULT_ORGANIZATION_SUFFIXES

    def __post_init__(self) -> None:
        """Normalize and validate."""
        if self.min_alias_length < 1:
            raise ValueError(f"min_alias_length must be >= 1, got {self.min_alias_length}")

        self.common_names = frozenset(n.strip().casefold() for n in self.common_names if n.strip())
        self.organization_suffixes = tuple(s for s in self.organization_suffixes if s)

    def is_name_very_common(self, token: str) -> bool:
        """Check whether *token* is too common to identify one person."""
        return len(token) < self.min_alias_length or token.casefold() in self.common_names

    def with_extra_common_names(self, names: Iterable[str]) -> "ResolverConfig":
        """Return a copy whose stoplist also contains *names*."""
        return replace(self, common_names=self.common_names | frozenset(names))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["common_names"] = sorted(self.common_names)
        data["organization_suffixes"] = list(self.organization_suffixes)
        return data
