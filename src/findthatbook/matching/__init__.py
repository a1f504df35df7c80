# ABOUTME: Deterministic matching-and-ranking engine for book candidates.
# ABOUTME: Exports the normalizer, classifiers, rank engine and match enums.

from findthatbook.matching.authors import AuthorMatch, merge_contributors, resolve_author_status
from findthatbook.matching.normalizer import normalize, strip_function_words
from findthatbook.matching.scoring import DEFAULT_POLICY, MatchPolicy, best_rank, calculate_match
from findthatbook.matching.title import TitleMatch, classify_title
from findthatbook.matching.types import AuthorStatus, MatchRank, MatchResult, MatchType

__all__ = [
    "DEFAULT_POLICY",
    "AuthorMatch",
    "AuthorStatus",
    "MatchPolicy",
    "MatchRank",
    "MatchResult",
    "MatchType",
    "TitleMatch",
    "best_rank",
    "calculate_match",
    "classify_title",
    "merge_contributors",
    "normalize",
    "resolve_author_status",
    "strip_function_words",
]
