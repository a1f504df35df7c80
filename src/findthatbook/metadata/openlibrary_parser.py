# ABOUTME: Parsing functions for Open Library API JSON responses.
# ABOUTME: Converts search docs into BookCandidates and classifies work author roles.

import re
from typing import Any, NamedTuple

from findthatbook.metadata.types import BookCandidate

DEFAULT_COVERS_URL = "https://covers.openlibrary.org"

# Roles on a work's author entry that still denote a principal creator.
_PRIMARY_ROLES = frozenset({"author", "writer", "creator", "main author"})

# Agent-role phrasing only; "translated into 30 languages" describes the author's own books.
_CONTRIBUTOR_BIO_RE = re.compile(
    r"\b(illustrators?|editors?|translators?|narrators?|illustrated by|edited by)\b",
    re.IGNORECASE,
)


class WorkAuthorRef(NamedTuple):
    """An author reference on a work record, with its credited role if any."""

    key: str
    role: str | None


def parse_text_value(value: Any) -> str | None:
    """Extract text from an Open Library text field.

    Handles the OL quirk where descriptions and bios can be either a plain
    string or a dict with {"type": ..., "value": "actual text"}.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        return value.get("value")
    return None


def build_cover_url(cover_id: int, covers_url: str = DEFAULT_COVERS_URL, size: str = "M") -> str:
    """Build an Open Library cover image URL from a search doc's cover_i.

    Args:
        cover_id: The numeric cover id.
        covers_url: Base URL of the covers service.
        size: Image size, "S" (small), "M" (medium), or "L" (large).
    """
    return f"{covers_url}/b/id/{cover_id}-{size}.jpg"


def parse_search_results(
    data: dict[str, Any], covers_url: str = DEFAULT_COVERS_URL
) -> list[BookCandidate]:
    """Parse an Open Library Search API response into BookCandidates.

    Each doc contributes title, author_name, first_publish_year, key and
    cover_i. Docs without a key cannot be enriched and are skipped.
    """
    results: list[BookCandidate] = []

    for doc in data.get("docs") or []:
        work_key = doc.get("key")
        if not work_key:
            continue

        cover_id = doc.get("cover_i")
        year = doc.get("first_publish_year")

        results.append(
            BookCandidate(
                title=doc.get("title") or "Unknown",
                authors=list(doc.get("author_name") or []),
                first_publish_year=year if isinstance(year, int) else None,
                external_id=work_key,
                cover_url=build_cover_url(cover_id, covers_url) if cover_id else None,
            )
        )

    return results


def parse_work_authors(data: dict[str, Any]) -> list[WorkAuthorRef]:
    """Extract author references from an Open Library Works response.

    Works store authors as [{"author": {"key": "/authors/..."}, "role": ...}];
    older records sometimes hold the key string directly.
    """
    refs: list[WorkAuthorRef] = []
    for entry in data.get("authors") or []:
        author_ref = entry.get("author", {})
        key = author_ref.get("key", "") if isinstance(author_ref, dict) else str(author_ref)
        if not key:
            continue
        role = entry.get("role")
        refs.append(WorkAuthorRef(key=key, role=role if isinstance(role, str) else None))
    return refs


def parse_author_name(data: dict[str, Any]) -> str | None:
    """Extract the author name from an Open Library Author response."""
    return data.get("name") or data.get("personal_name")


def is_contributor_role(role: str | None) -> bool:
    """Whether a credited role names a contributor rather than an author."""
    if not role or not role.strip():
        return False
    return role.strip().lower() not in _PRIMARY_ROLES


def describes_contributor(bio: str | None, title_hint: str | None = None) -> bool:
    """Whether an author biography marks them as a contributor for this work.

    A bio that calls the person an illustrator, editor, translator or narrator
    counts as contributor evidence unless it also names the work being
    searched for, in which case the person is likely that book's own author.
    """
    if not bio or not _CONTRIBUTOR_BIO_RE.search(bio):
        return False
    if title_hint and title_hint.strip() and title_hint.strip().lower() in bio.lower():
        return False
    return True
