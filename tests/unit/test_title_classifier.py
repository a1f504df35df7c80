# ABOUTME: Unit tests for title classification and raw-query re-verification.
# ABOUTME: Covers exact, near and non-matches plus downgrades for inferred titles.

from findthatbook.matching.title import TitleMatch, classify_title


class TestClassifyTitle:
    """Tests for classify_title."""

    def test_exact_title_typed_by_user(self) -> None:
        """Equal normalized titles present in the raw query are exact."""
        result = classify_title("The Hobbit", "The Hobbit", "The Hobbit Tolkien")
        assert result == TitleMatch(exact=True, near=False)

    def test_exact_ignores_case_and_punctuation(self) -> None:
        """Exactness is decided on normalized forms."""
        result = classify_title("the hobbit", "The Hobbit!", "the hobbit")
        assert result.exact is True

    def test_exact_survives_noise_in_query(self) -> None:
        """Extra words around the title in the raw query do not matter."""
        result = classify_title("The Hobbit", "The Hobbit", "read the hobbit please")
        assert result == TitleMatch(exact=True, near=False)

    def test_substring_is_near(self) -> None:
        """An intent title contained in a longer candidate title is near."""
        result = classify_title("Hobbit", "The Hobbit", "Hobbit Tolkien")
        assert result == TitleMatch(exact=False, near=True)

    def test_function_words_are_significant(self) -> None:
        """'hobbit' is not equal to 'the hobbit'."""
        assert classify_title("hobbit", "the hobbit", "hobbit").exact is False

    def test_unrelated_title_is_no_match(self) -> None:
        """A candidate title not containing the intent title does not match."""
        result = classify_title("The Hobbit", "The Silmarillion", "the hobbit")
        assert result == TitleMatch(exact=False, near=False)

    def test_intent_longer_than_candidate_is_no_match(self) -> None:
        """Containment only runs one way: candidate must contain the intent title."""
        result = classify_title("The Hobbit Illustrated", "The Hobbit", "the hobbit illustrated")
        assert result == TitleMatch(exact=False, near=False)

    def test_no_intent_title_is_no_match(self) -> None:
        """Without a requested title nothing matches."""
        assert classify_title(None, "The Hobbit", "tolkien") == TitleMatch(False, False)
        assert classify_title("  ", "The Hobbit", "tolkien") == TitleMatch(False, False)

    def test_typo_in_query_downgrades_to_near(self) -> None:
        """An exact title the user never typed (typo) is downgraded to near."""
        result = classify_title("The Hobbit", "The Hobbit", "hobiit")
        assert result == TitleMatch(exact=False, near=True)

    def test_inferred_full_title_downgrades_to_near(self) -> None:
        """A partial phrase expanded to a full title is downgraded to near."""
        result = classify_title(
            "The Adventures of Huckleberry Finn",
            "The Adventures of Huckleberry Finn",
            "huckleberry",
        )
        assert result == TitleMatch(exact=False, near=True)

    def test_query_without_article_downgrades_without_fragment(self) -> None:
        """Without a fragment the full normalized title must appear verbatim."""
        result = classify_title(
            "The Adventures of Huckleberry Finn",
            "The Adventures of Huckleberry Finn",
            "adventures of huckleberry finn",
        )
        assert result.exact is False
        assert result.near is True

    def test_fragment_compares_core_forms(self) -> None:
        """With a fragment, function words are ignored when checking the raw query."""
        result = classify_title(
            "The Adventures of Huckleberry Finn",
            "The Adventures of Huckleberry Finn",
            "adventures of huckleberry finn",
            fragment="adventures of huckleberry finn",
        )
        assert result == TitleMatch(exact=True, near=False)

    def test_fragment_does_not_rescue_partial_query(self) -> None:
        """A fragment still requires the whole core title in the raw query."""
        result = classify_title(
            "The Adventures of Huckleberry Finn",
            "The Adventures of Huckleberry Finn",
            "huckleberry",
            fragment="huckleberry",
        )
        assert result == TitleMatch(exact=False, near=True)

    def test_function_word_only_title_is_compared_whole(self) -> None:
        """A title with no core words must appear in full in the raw query."""
        absent = classify_title("The A", "The A", "something else", fragment="the a")
        present = classify_title("The A", "The A", "find the a please", fragment="the a")
        assert absent == TitleMatch(exact=False, near=True)
        assert present == TitleMatch(exact=True, near=False)

    def test_never_both_exact_and_near(self) -> None:
        """Exact and near are mutually exclusive."""
        for intent, book, raw in [
            ("The Hobbit", "The Hobbit", "the hobbit"),
            ("The Hobbit", "The Hobbit", "hobiit"),
            ("Hobbit", "The Hobbit", "hobbit"),
        ]:
            result = classify_title(intent, book, raw)
            assert not (result.exact and result.near)
