# ABOUTME: Open Library provider implementing candidate search and author hierarchy lookup.
# ABOUTME: Searches openlibrary.org by title/author/keywords and resolves work author roles.

import asyncio
import logging
import re
from dataclasses import replace
from typing import Any

from findthatbook.metadata.http import HttpClient, MetadataFetchError
from findthatbook.metadata.openlibrary_parser import (
    DEFAULT_COVERS_URL,
    WorkAuthorRef,
    describes_contributor,
    is_contributor_role,
    parse_author_name,
    parse_search_results,
    parse_text_value,
    parse_work_authors,
)
from findthatbook.metadata.provider import AuthorDetails
from findthatbook.metadata.types import BookCandidate, SearchIntent

logger = logging.getLogger(__name__)

DEFAULT_OPENLIBRARY_URL = "https://openlibrary.org"
_SEARCH_LIMIT = 10

# Matches a colon followed by a space and remaining text (subtitle pattern).
_SUBTITLE_RE = re.compile(r"\s*:\s+.+$")


def _strip_subtitle(title: str) -> str | None:
    """Remove subtitle from a title string (text after ": ").

    Returns the stripped title, or None if no subtitle was found or
    stripping would produce an identical or empty string.
    """
    stripped = _SUBTITLE_RE.sub("", title).strip()
    if stripped and stripped != title.strip():
        return stripped
    return None


def _work_path(external_id: str) -> str:
    """Turn a work id ("OL45883W" or "/works/OL45883W") into its API path."""
    if external_id.startswith("/"):
        return external_id
    return f"/works/{external_id}"


class OpenLibraryProvider:
    """Candidate search and author lookup backed by the Open Library API.

    Implements both CandidateSearcher and AuthorDetailProvider. Uses a
    dependency-injected HttpClient for testability.
    """

    def __init__(
        self,
        http_client: HttpClient,
        *,
        base_url: str = DEFAULT_OPENLIBRARY_URL,
        covers_url: str = DEFAULT_COVERS_URL,
        search_limit: int = _SEARCH_LIMIT,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._covers_url = covers_url.rstrip("/")
        self._search_limit = search_limit

    async def search_candidates(self, intent: SearchIntent) -> list[BookCandidate]:
        """Search Open Library with every criterion the intent carries.

        If the search returns nothing and the title contains a subtitle
        (text after ": "), retries once with the subtitle stripped.

        Raises:
            MetadataFetchError: When the search request fails.
        """
        candidates = await self._search_ol(intent)
        if not candidates and intent.title:
            stripped = _strip_subtitle(intent.title)
            if stripped:
                logger.info("No results for %r, retrying as %r", intent.title, stripped)
                candidates = await self._search_ol(replace(intent, title=stripped))
        return candidates

    async def _search_ol(self, intent: SearchIntent) -> list[BookCandidate]:
        """Execute a single Open Library search query."""
        params: dict[str, str] = {}
        if intent.title and intent.title.strip():
            params["title"] = intent.title.strip()
        if intent.author and intent.author.strip():
            params["author"] = intent.author.strip()
        if intent.keywords:
            params["q"] = " ".join(intent.keywords)
        if not params:
            return []
        params["limit"] = str(self._search_limit)

        data = await self._http.get(f"{self._base_url}/search.json", params=params)
        candidates = parse_search_results(data, self._covers_url)
        logger.debug("Open Library returned %d candidate(s) for %s", len(candidates), params)
        return candidates

    async def get_author_details(
        self, external_id: str, title_hint: str | None = None
    ) -> AuthorDetails:
        """Split a work's credited authors into primary authors and contributors.

        Fetches the works record, then resolves every author reference
        concurrently. An entry with a non-author role ("Illustrator") is a
        contributor. On works crediting several authors, an author whose bio
        describes contributor work and does not mention title_hint is a
        contributor too, unless that would leave the work with no primary
        author. Authors that fail to resolve are skipped.

        Raises:
            MetadataFetchError: When the works record cannot be fetched.
        """
        works_data = await self._http.get(f"{self._base_url}{_work_path(external_id)}.json")
        refs = parse_work_authors(works_data)

        resolved = await asyncio.gather(*(self._resolve_author(ref) for ref in refs))
        credited = [(ref, author) for ref, author in zip(refs, resolved) if author is not None]

        by_role = {name for ref, (name, _) in credited if is_contributor_role(ref.role)}
        by_bio: set[str] = set()
        if len(refs) > 1:
            by_bio = {
                name
                for ref, (name, bio) in credited
                if name not in by_role and describes_contributor(bio, title_hint)
            }
            if len(by_role) + len(by_bio) >= len(credited):
                by_bio = set()

        primary: list[str] = []
        contributors: list[str] = []
        for _ref, (name, _bio) in credited:
            if name in by_role or name in by_bio:
                contributors.append(name)
            else:
                primary.append(name)

        return AuthorDetails(primary_authors=primary, contributors=contributors)

    async def _resolve_author(self, ref: WorkAuthorRef) -> tuple[str, str | None] | None:
        """Fetch an author record, returning (name, bio) or None on failure."""
        try:
            author_data: dict[str, Any] = await self._http.get(f"{self._base_url}{ref.key}.json")
        except MetadataFetchError as exc:
            logger.warning("Author lookup failed for %s: %s", ref.key, exc)
            return None
        name = parse_author_name(author_data)
        if not name:
            return None
        return name, parse_text_value(author_data.get("bio"))
