"""Contributor alias resolution for commit histories.

This package provides:
- Parsing (authordedupe.parse): author strings, name feeds, git logs
- Clustering (authordedupe.clustering): alias equivalence classes
- Candidates (authordedupe.candidates): alias candidate generation
- Engine (authordedupe.engine): resolver, configuration, activity analysis
- Audit (authordedupe.audit): structured event logging
- CLI (authordedupe.cli): command-line interface
- Public API (authordedupe.api): file-level convenience functions
"""

__version__ = "0.4.0"
__license__ = "MIT"

from authordedupe.api import (
    consolidate_file,
    load_resolver,
    scan_activity,
    scan_newcomers,
    seed_from_git_log,
    write_activity_csv,
    write_author_list,
    write_newcomers_csv,
)
from authordedupe.engine import AliasResolver, ResolverConfig
from authordedupe.parse import GitLogError, NameFeedError, ParsedAuthor, parse_author

__all__ = [
    "__version__",
    "__license__",
    "AliasResolver",
    "GitLogError",
    "NameFeedError",
    "ParsedAuthor",
    "ResolverConfig",
    "consolidate_file",
    "load_resolver",
    "parse_author",
    "scan_activity",
    "scan_newcomers",
    "seed_from_git_log",
    "write_activity_csv",
    "write_author_list",
    "write_newcomers_csv",
]
