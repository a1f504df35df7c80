# ABOUTME: Core data structures for search intents and book candidates.
# ABOUTME: SearchIntent is read-only input to matching; BookCandidate is enriched in place.

from dataclasses import dataclass, field

from findthatbook.matching.types import AuthorStatus, MatchRank, MatchType, MatchResult


@dataclass
class IntentExplanation:
    """Why each field of a SearchIntent was filled the way it was."""

    title_reason: str | None = None
    author_reason: str | None = None
    keywords_reason: str | None = None


@dataclass
class SearchIntent:
    """Structured interpretation of a raw user query.

    Title and author are the interpreted values (e.g. "J.R.R. Tolkien"); the
    extracted fragments are the literal substrings of the query that justify
    them (e.g. "tolkien").
    """

    title: str | None = None
    author: str | None = None
    keywords: list[str] = field(default_factory=list)
    extracted_title_fragment: str | None = None
    extracted_author_fragment: str | None = None
    explanation: IntentExplanation | None = None

    @property
    def is_valid(self) -> bool:
        """Whether the intent carries at least one usable search criterion."""
        return bool(
            (self.title and self.title.strip())
            or (self.author and self.author.strip())
            or self.keywords
        )


@dataclass
class BookCandidate:
    """A single work returned by the search provider.

    Search fills title, authors, year, id and cover. Enrichment fills the
    author hierarchy and match fields; the explainer fills explanation.
    """

    title: str
    authors: list[str] = field(default_factory=list)
    primary_authors: list[str] = field(default_factory=list)
    contributors: list[str] = field(default_factory=list)
    first_publish_year: int | None = None
    external_id: str = ""
    cover_url: str | None = None
    explanation: str = ""
    rank: MatchRank = MatchRank.NONE
    match_type: MatchType = MatchType.NONE
    author_status: AuthorStatus = AuthorStatus.UNKNOWN

    @property
    def author(self) -> str:
        """Convenience property: joined author string for display."""
        return ", ".join(self.authors) if self.authors else ""

    def apply_match(self, result: MatchResult) -> None:
        """Store a rank engine result on this candidate."""
        self.rank = result.rank
        self.match_type = result.match_type
        self.author_status = result.author_status
