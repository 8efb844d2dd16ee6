"""Parsers for raw author strings, name feeds and git logs."""

from authordedupe.parse.author import ParsedAuthor, parse_author, split_alias_line
from authordedupe.parse.git_log import Commit, GitLogError, read_commits
from authordedupe.parse.name_feed import NameFeedError, parse_name_feed

__all__ = [
    "Commit",
    "GitLogError",
    "NameFeedError",
    "ParsedAuthor",
    "parse_author",
    "parse_name_feed",
    "read_commits",
    "split_alias_line",
]
