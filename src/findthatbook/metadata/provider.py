# ABOUTME: Collaborator protocols consumed by the search orchestrator.
# ABOUTME: Open Library implements search and author lookup; the language model implements the rest.

from typing import NamedTuple, Protocol, runtime_checkable

from findthatbook.metadata.types import BookCandidate, SearchIntent


class AuthorDetails(NamedTuple):
    """Author hierarchy of a single work."""

    primary_authors: list[str]
    contributors: list[str]


@runtime_checkable
class IntentInterpreter(Protocol):
    """Turns a raw user query into a structured SearchIntent."""

    async def extract_intent(self, raw_query: str) -> SearchIntent: ...


@runtime_checkable
class CandidateSearcher(Protocol):
    """Finds raw candidate works for a search intent.

    Candidates come back with title, authors, year, external id and cover
    populated, and with empty primary author and contributor lists.
    """

    async def search_candidates(self, intent: SearchIntent) -> list[BookCandidate]: ...


@runtime_checkable
class AuthorDetailProvider(Protocol):
    """Splits a work's authors into primary authors and contributors.

    title_hint is the interpreted title, used to disambiguate authors who
    are primary on some works and contributors on others.
    """

    async def get_author_details(
        self, external_id: str, title_hint: str | None = None
    ) -> AuthorDetails: ...


@runtime_checkable
class ResultExplainer(Protocol):
    """Annotates ranked candidates with a justification for each.

    May reorder or drop candidates but never adds new ones.
    """

    async def explain_results(
        self, raw_query: str, intent: SearchIntent, candidates: list[BookCandidate]
    ) -> list[BookCandidate]: ...
