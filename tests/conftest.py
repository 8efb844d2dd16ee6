"""Pytest configuration and fixtures for test suite."""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from authordedupe.engine import AliasResolver, ResolverConfig  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def make_resolver() -> Callable[..., AliasResolver]:
    """Factory for resolvers preloaded from in-memory feed and roster lines."""

    def _factory(
        *,
        name_feed: list[str] | None = None,
        author_list: list[str] | None = None,
        config: ResolverConfig | None = None,
    ) -> AliasResolver:
        resolver = AliasResolver(config)
        if name_feed:
            resolver.load_name_feed(name_feed)
        if author_list:
            resolver.initialize_from_author_list(author_list)
        return resolver

    return _factory
