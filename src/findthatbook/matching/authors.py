# ABOUTME: Author hierarchy resolution for a requested author against a candidate work.
# ABOUTME: Checks primary authors, then contributors, then the unresolved author list.

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from findthatbook.matching.normalizer import normalize
from findthatbook.matching.types import AuthorStatus

if TYPE_CHECKING:
    from findthatbook.metadata.types import BookCandidate


class AuthorMatch(NamedTuple):
    """Whether the requested author matched, and in which role."""

    matched: bool
    status: AuthorStatus


NO_AUTHOR_MATCH = AuthorMatch(matched=False, status=AuthorStatus.UNKNOWN)


def _any_contains(names: list[str], needle: str) -> bool:
    return any(needle in normalize(name) for name in names)


def resolve_author_status(intent_author: str | None, candidate: BookCandidate) -> AuthorMatch:
    """Classify the requested author's role in a candidate work.

    Tiers, in strict priority order, each a normalized substring test:
      1. candidate.primary_authors -> PRIMARY
      2. candidate.contributors    -> CONTRIBUTOR
      3. candidate.authors         -> CONTRIBUTOR

    The third tier covers works whose roles were never resolved (for example
    when the author lookup failed). It is deliberately never credited as
    PRIMARY.

    Returns NO_AUTHOR_MATCH when no author was requested or none matched.
    """
    requested = normalize(intent_author)
    if not requested:
        return NO_AUTHOR_MATCH

    if _any_contains(candidate.primary_authors, requested):
        return AuthorMatch(matched=True, status=AuthorStatus.PRIMARY)
    if _any_contains(candidate.contributors, requested):
        return AuthorMatch(matched=True, status=AuthorStatus.CONTRIBUTOR)
    if _any_contains(candidate.authors, requested):
        return AuthorMatch(matched=True, status=AuthorStatus.CONTRIBUTOR)
    return NO_AUTHOR_MATCH


def merge_contributors(
    authors: list[str], primary_authors: list[str], contributors: list[str]
) -> list[str]:
    """Build a candidate's contributor list from lookup and search data.

    Starts from the contributors found by the author lookup, then adds every
    search-result author that is not a primary author. Comparison is
    case-insensitive and the first spelling seen is kept.
    """
    primary = {name.casefold() for name in primary_authors}
    extra = [name for name in authors if name.casefold() not in primary]

    seen: set[str] = set()
    merged: list[str] = []
    for name in [*contributors, *extra]:
        key = name.casefold()
        if key not in seen:
            seen.add(key)
            merged.append(name)
    return merged
