# ABOUTME: Shared pytest fixtures for findthatbook tests.
# ABOUTME: Provides sample intents and candidates built around "The Hobbit".

import pytest

from findthatbook.metadata import BookCandidate, SearchIntent


@pytest.fixture
def hobbit_intent() -> SearchIntent:
    """Intent for a query naming both the title and the author."""
    return SearchIntent(title="The Hobbit", author="Tolkien")


@pytest.fixture
def hobbit_candidate() -> BookCandidate:
    """Search result for The Hobbit with Tolkien resolved as primary author."""
    return BookCandidate(
        title="The Hobbit",
        authors=["J.R.R. Tolkien"],
        primary_authors=["J.R.R. Tolkien"],
        first_publish_year=1937,
        external_id="/works/OL27482W",
    )


@pytest.fixture
def illustrated_candidate() -> BookCandidate:
    """Search result where Alan Lee is credited only as a contributor."""
    return BookCandidate(
        title="The Hobbit",
        authors=["J.R.R. Tolkien", "Alan Lee"],
        primary_authors=["J.R.R. Tolkien"],
        contributors=["Alan Lee"],
        external_id="/works/OL27479W",
    )
