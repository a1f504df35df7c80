# ABOUTME: Rank engine combining title classification and author hierarchy into a MatchRank.
# ABOUTME: Applies a fixed, first-rule-wins decision table over the two signals.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from findthatbook.matching.authors import resolve_author_status
from findthatbook.matching.normalizer import normalize
from findthatbook.matching.title import classify_title
from findthatbook.matching.types import (
    NO_MATCH,
    AuthorStatus,
    MatchRank,
    MatchResult,
    MatchType,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from findthatbook.metadata.types import BookCandidate, SearchIntent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchPolicy:
    """Tunable parts of the decision table.

    title_only_fallback: when a title matches but the requested author does
    not, rank the candidate TITLE_ONLY_FALLBACK instead of discarding it.
    """

    title_only_fallback: bool = True


DEFAULT_POLICY = MatchPolicy()


def calculate_match(
    raw_query: str,
    intent: SearchIntent,
    candidate: BookCandidate,
    policy: MatchPolicy = DEFAULT_POLICY,
) -> MatchResult:
    """Rank one candidate against the search intent.

    Rules, first match wins:
      a. exact title, author primary or not requested -> STRONG_MATCH
      b. exact title, author is a contributor         -> TITLE_AND_CONTRIBUTOR_MATCH
      c. near title, author matched or not requested  -> NEAR_MATCH
      d. author matched, no title requested           -> AUTHOR_ONLY_FALLBACK
      e. title matched, requested author unmatched    -> TITLE_ONLY_FALLBACK
    Anything else is NO_MATCH.

    The requested author is the verbatim fragment from the query when the
    intent has one, since an interpreted full name ("J.R.R. Tolkien") is
    spelled less predictably than what the user typed ("tolkien").
    """
    title = classify_title(
        intent.title,
        candidate.title,
        raw_query,
        fragment=intent.extracted_title_fragment,
    )
    requested_author = intent.extracted_author_fragment or intent.author
    author = resolve_author_status(requested_author, candidate)

    title_requested = bool(normalize(intent.title))
    author_requested = bool(normalize(requested_author))

    if title.exact and (author.status is AuthorStatus.PRIMARY or not author_requested):
        result = MatchResult(MatchRank.STRONG_MATCH, MatchType.EXACT_TITLE, author.status)
    elif title.exact and author.status is AuthorStatus.CONTRIBUTOR:
        result = MatchResult(
            MatchRank.TITLE_AND_CONTRIBUTOR_MATCH,
            MatchType.EXACT_TITLE,
            AuthorStatus.CONTRIBUTOR,
        )
    elif title.near and (author.matched or not author_requested):
        result = MatchResult(MatchRank.NEAR_MATCH, MatchType.NEAR_MATCH_TITLE, author.status)
    elif author.matched and not title_requested:
        result = MatchResult(MatchRank.AUTHOR_ONLY_FALLBACK, MatchType.AUTHOR_ONLY, author.status)
    elif (title.exact or title.near) and policy.title_only_fallback:
        match_type = MatchType.EXACT_TITLE if title.exact else MatchType.NEAR_MATCH_TITLE
        result = MatchResult(MatchRank.TITLE_ONLY_FALLBACK, match_type, AuthorStatus.UNKNOWN)
    else:
        result = NO_MATCH

    logger.debug(
        "Ranked %r as %s (title exact=%s near=%s, author %s)",
        candidate.title,
        result.rank.name,
        title.exact,
        title.near,
        author.status.value,
    )
    return result


def best_rank(candidates: Iterable[BookCandidate]) -> MatchRank:
    """Highest rank among the candidates, or NONE for an empty iterable."""
    return max((c.rank for c in candidates), default=MatchRank.NONE)
