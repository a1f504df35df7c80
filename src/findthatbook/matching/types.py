# ABOUTME: Match classification enums and the MatchResult value returned by the rank engine.
# ABOUTME: MatchRank is totally ordered; higher values are more relevant.

from dataclasses import dataclass
from enum import Enum, IntEnum


class MatchRank(IntEnum):
    """Discrete relevance tiers, ordered from no match to strongest match."""

    NONE = 0
    # Title matched but the requested author did not.
    TITLE_ONLY_FALLBACK = 1
    # Author matched and no title was requested.
    AUTHOR_ONLY_FALLBACK = 2
    NEAR_MATCH = 3
    # Exact title, but the requested author is only a contributor.
    TITLE_AND_CONTRIBUTOR_MATCH = 4
    STRONG_MATCH = 5


class MatchType(Enum):
    """Which signal produced a candidate's rank."""

    NONE = "None"
    EXACT_TITLE = "ExactTitle"
    NEAR_MATCH_TITLE = "NearMatchTitle"
    AUTHOR_ONLY = "AuthorOnly"
    TITLE_ONLY = "TitleOnly"


class AuthorStatus(Enum):
    """Role of the requested author within a candidate work."""

    UNKNOWN = "Unknown"
    PRIMARY = "Primary"
    CONTRIBUTOR = "Contributor"


@dataclass(frozen=True)
class MatchResult:
    """Outcome of ranking a single candidate against a search intent."""

    rank: MatchRank
    match_type: MatchType
    author_status: AuthorStatus


NO_MATCH = MatchResult(MatchRank.NONE, MatchType.NONE, AuthorStatus.UNKNOWN)
