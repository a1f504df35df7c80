# ABOUTME: Unit tests for Open Library response parsing functions.
# ABOUTME: Validates search doc mapping, work author refs, and contributor role heuristics.

from findthatbook.metadata.openlibrary_parser import (
    WorkAuthorRef,
    build_cover_url,
    describes_contributor,
    is_contributor_role,
    parse_author_name,
    parse_search_results,
    parse_text_value,
    parse_work_authors,
)
from tests.fixtures.openlibrary_responses import (
    AUTHOR_ALAN_LEE,
    AUTHOR_TOLKIEN,
    SEARCH_RESPONSE,
    SEARCH_RESPONSE_EMPTY,
    SEARCH_RESPONSE_MISSING_FIELDS,
    WORKS_ANNOTATED_HOBBIT,
    WORKS_ILLUSTRATED_HOBBIT,
    WORKS_NO_AUTHORS,
)


class TestParseSearchResults:
    """Tests for parse_search_results."""

    def test_parses_multiple_results(self) -> None:
        """Each doc becomes a candidate, in response order."""
        results = parse_search_results(SEARCH_RESPONSE)
        assert [c.external_id for c in results] == [
            "/works/OL27482W",
            "/works/OL27479W",
            "/works/OL8479867W",
        ]

    def test_maps_fields(self) -> None:
        """Title, authors, year and cover are copied from the doc."""
        first = parse_search_results(SEARCH_RESPONSE)[0]
        assert first.title == "The Hobbit"
        assert first.authors == ["J.R.R. Tolkien"]
        assert first.first_publish_year == 1937
        assert first.cover_url == "https://covers.openlibrary.org/b/id/14627509-M.jpg"

    def test_hierarchy_left_empty(self) -> None:
        """Search results carry no author roles or rank yet."""
        for candidate in parse_search_results(SEARCH_RESPONSE):
            assert candidate.primary_authors == []
            assert candidate.contributors == []
            assert candidate.explanation == ""

    def test_missing_cover_is_none(self) -> None:
        """A doc without cover_i has no cover URL."""
        assert parse_search_results(SEARCH_RESPONSE)[1].cover_url is None

    def test_custom_covers_url(self) -> None:
        """The covers base URL is configurable."""
        first = parse_search_results(SEARCH_RESPONSE, "http://covers.local")[0]
        assert first.cover_url == "http://covers.local/b/id/14627509-M.jpg"

    def test_empty_search(self) -> None:
        """No docs means no candidates."""
        assert parse_search_results(SEARCH_RESPONSE_EMPTY) == []
        assert parse_search_results({}) == []

    def test_missing_fields_handled(self) -> None:
        """Docs without a key are skipped; other gaps get defaults."""
        results = parse_search_results(SEARCH_RESPONSE_MISSING_FIELDS)
        assert len(results) == 2
        assert results[0].title == "Bare Record"
        assert results[0].authors == []
        assert results[1].title == "Unknown"
        assert results[1].first_publish_year is None


class TestParseWorkAuthors:
    """Tests for parse_work_authors."""

    def test_extracts_keys_and_roles(self) -> None:
        """Author keys and credited roles are returned in order."""
        refs = parse_work_authors(WORKS_ILLUSTRATED_HOBBIT)
        assert refs == [
            WorkAuthorRef(key="/authors/OL26320A", role=None),
            WorkAuthorRef(key="/authors/OL21594A", role="Illustrator"),
        ]

    def test_entries_without_role(self) -> None:
        """Entries lacking a role field get role None."""
        refs = parse_work_authors(WORKS_ANNOTATED_HOBBIT)
        assert [r.role for r in refs] == [None, None]

    def test_string_author_reference(self) -> None:
        """Older records may hold the key string directly."""
        refs = parse_work_authors({"authors": [{"author": "/authors/OL1A"}]})
        assert refs == [WorkAuthorRef(key="/authors/OL1A", role=None)]

    def test_no_authors(self) -> None:
        """A work without authors yields no refs."""
        assert parse_work_authors(WORKS_NO_AUTHORS) == []


class TestParseAuthor:
    """Tests for author record helpers."""

    def test_extracts_name(self) -> None:
        """Name is read from the author record."""
        assert parse_author_name(AUTHOR_TOLKIEN) == "J.R.R. Tolkien"

    def test_falls_back_to_personal_name(self) -> None:
        """personal_name is used when name is absent."""
        assert parse_author_name({"personal_name": "Alan Lee"}) == "Alan Lee"

    def test_missing_name_returns_none(self) -> None:
        """A record without any name gives None."""
        assert parse_author_name({}) is None

    def test_text_value_variants(self) -> None:
        """Bios may be plain strings or typed text dicts."""
        assert parse_text_value(AUTHOR_ALAN_LEE["bio"]).startswith("English book illustrator")
        assert parse_text_value(AUTHOR_TOLKIEN["bio"]).startswith("English writer")
        assert parse_text_value(None) is None
        assert parse_text_value(42) is None


class TestContributorHeuristics:
    """Tests for is_contributor_role and describes_contributor."""

    def test_non_author_roles_are_contributors(self) -> None:
        """Illustrator, editor and translator roles are contributors."""
        assert is_contributor_role("Illustrator")
        assert is_contributor_role("Editor")
        assert is_contributor_role("translator")

    def test_author_roles_are_primary(self) -> None:
        """Missing or author-like roles are not contributors."""
        assert not is_contributor_role(None)
        assert not is_contributor_role("")
        assert not is_contributor_role("Author")
        assert not is_contributor_role(" main author ")

    def test_bio_mentions_contributor_work(self) -> None:
        """A bio describing illustration or editing marks a contributor."""
        assert describes_contributor("English book illustrator.")
        assert describes_contributor("Editor of many anthologies.", "The Hobbit")

    def test_bio_naming_the_title_is_primary(self) -> None:
        """A bio that names the searched work belongs to its author."""
        bio = "Translator and author of The Hobbit."
        assert not describes_contributor(bio, "The Hobbit")

    def test_passive_mentions_are_not_contributor(self) -> None:
        """Translations of or adaptations from an author's books say nothing about roles."""
        bio = "His novels were translated into dozens of languages and adapted into films."
        assert not describes_contributor(bio, "Dune")
        assert not describes_contributor("She wrote the introduction herself; edited twice.")

    def test_agent_phrases_are_contributor(self) -> None:
        """'illustrated by' and 'edited by' phrasing counts."""
        assert describes_contributor("Anthologies edited by him include many classics.")
        assert describes_contributor("Narrator of over 200 audiobooks.")

    def test_plain_bio_is_not_contributor(self) -> None:
        """Bios without contributor phrasing do not count."""
        assert not describes_contributor("English novelist.")
        assert not describes_contributor(None)


class TestBuildCoverUrl:
    """Tests for build_cover_url."""

    def test_default_medium_size(self) -> None:
        """Default size is M on the public covers host."""
        assert build_cover_url(123) == "https://covers.openlibrary.org/b/id/123-M.jpg"

    def test_custom_size(self) -> None:
        """Size letter is placed before the extension."""
        assert build_cover_url(123, size="L").endswith("/b/id/123-L.jpg")
