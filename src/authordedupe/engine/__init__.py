"""Resolution engine.

This package provides the alias resolver, its configuration and the
contributor activity analysis built on top of it.
"""

from authordedupe.engine.activity import (
    MonthlyActivity,
    Newcomer,
    count_monthly_activity,
    find_newcomers,
)
from authordedupe.engine.config import DEFAULT_COMMON_NAMES, ResolverConfig
from authordedupe.engine.resolver import AliasResolver, split_coauthors

__all__ = [
    "DEFAULT_COMMON_NAMES",
    "AliasResolver",
    "MonthlyActivity",
    "Newcomer",
    "ResolverConfig",
    "count_monthly_activity",
    "find_newcomers",
    "split_coauthors",
]
