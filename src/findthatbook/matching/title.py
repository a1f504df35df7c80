# ABOUTME: Title classification of a candidate against the interpreted search title.
# ABOUTME: Exact matches are re-verified against what the user actually typed.

from typing import NamedTuple

from findthatbook.matching.normalizer import normalize, strip_function_words


class TitleMatch(NamedTuple):
    """Outcome of comparing a candidate title with the intent title."""

    exact: bool
    near: bool


NO_TITLE_MATCH = TitleMatch(exact=False, near=False)


def _appears_in_query(candidate_title: str, raw_query: str, *, use_core_form: bool) -> bool:
    """Check that the candidate's title text is present in the raw query.

    With use_core_form, both sides drop function words first so that
    "adventures of huckleberry finn" still covers "The Adventures of Huckleberry Finn".
    A title made only of function words has no core form and is compared whole.
    """
    if use_core_form:
        core_title = strip_function_words(candidate_title)
        if core_title:
            return core_title in strip_function_words(raw_query)
    return normalize(candidate_title) in normalize(raw_query)


def classify_title(
    intent_title: str | None,
    candidate_title: str | None,
    raw_query: str | None,
    *,
    fragment: str | None = None,
) -> TitleMatch:
    """Classify a candidate title as an exact, near, or non-match.

    Exact means the normalized titles are equal; near means the normalized
    intent title is a substring of the normalized candidate title. Function
    words are significant here: "hobbit" is a near match for "The Hobbit".

    An exact match only stands if the raw query contains the candidate's
    title. Otherwise the interpreted title was inferred rather than typed
    (a typo, or a partial phrase expanded to a full title) and the match is
    downgraded to near. When the intent carries a verbatim title fragment the
    check compares function-word-stripped forms.

    Args:
        intent_title: Title interpreted from the user's query.
        candidate_title: Title of the work returned by search.
        raw_query: The user's query exactly as typed.
        fragment: Literal query substring that justified the intent title.

    Returns:
        TitleMatch with at most one of exact/near set.
    """
    query_title = normalize(intent_title)
    if not query_title:
        return NO_TITLE_MATCH

    book_title = normalize(candidate_title)
    if book_title == query_title:
        if _appears_in_query(candidate_title or "", raw_query or "", use_core_form=bool(fragment)):
            return TitleMatch(exact=True, near=False)
        return TitleMatch(exact=False, near=True)

    return TitleMatch(exact=False, near=query_title in book_title)
