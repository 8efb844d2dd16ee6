"""Alias partitioning.

This module maintains disjoint equivalence classes of alias strings, merged
transitively, and the mail/name relations seeded from a name feed.
"""

from authordedupe.clustering.equivalence import EquivalenceClassIndex, alias_key
from authordedupe.clustering.mapping_store import MappingStore

__all__ = [
    "EquivalenceClassIndex",
    "MappingStore",
    "alias_key",
]
