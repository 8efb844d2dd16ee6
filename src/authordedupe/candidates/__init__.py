"""Alias candidate generation.

For one raw author string, derives every string hypothesized to denote the
same person: mail address and its local part, display name, login handle and
the name feed relations of each, filtered by the common-name guard.
"""

from authordedupe.candidates.generator import find_aliases_for_name

__all__ = ["find_aliases_for_name"]
