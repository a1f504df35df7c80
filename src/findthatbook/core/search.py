# ABOUTME: Search orchestrator: intent -> candidates -> concurrent enrichment -> best rank -> explain.
# ABOUTME: Absorbs collaborator failures so only cancellation reaches the caller.

import asyncio
import logging

from findthatbook.ai.llm import LanguageModelError
from findthatbook.matching.authors import merge_contributors
from findthatbook.matching.scoring import DEFAULT_POLICY, MatchPolicy, best_rank, calculate_match
from findthatbook.matching.types import MatchRank
from findthatbook.metadata.http import MetadataFetchError
from findthatbook.metadata.provider import (
    AuthorDetailProvider,
    AuthorDetails,
    CandidateSearcher,
    IntentInterpreter,
    ResultExplainer,
)
from findthatbook.metadata.types import BookCandidate, SearchIntent

logger = logging.getLogger(__name__)

MAX_RESULTS = 5


class BookSearchService:
    """Finds the best-matching books for a free-text query.

    Pipeline per request:
      1. interpret the query into a SearchIntent (invalid -> no results)
      2. fetch raw candidates for the intent
      3. enrich every candidate concurrently with its author hierarchy and rank
      4. drop unranked candidates
      5. keep only candidates sharing the highest rank, capped at max_results
      6. hand the survivors to the explainer

    Cancelling the task awaiting search() cancels every in-flight
    collaborator call and enrichment task; no partial results are returned.
    """

    def __init__(
        self,
        interpreter: IntentInterpreter,
        searcher: CandidateSearcher,
        explainer: ResultExplainer,
        *,
        author_details: AuthorDetailProvider | None = None,
        policy: MatchPolicy = DEFAULT_POLICY,
        max_results: int = MAX_RESULTS,
    ) -> None:
        if author_details is None:
            if not isinstance(searcher, AuthorDetailProvider):
                msg = "author_details is required when the searcher cannot look up authors"
                raise TypeError(msg)
            author_details = searcher
        self._interpreter = interpreter
        self._searcher = searcher
        self._author_details = author_details
        self._explainer = explainer
        self._policy = policy
        self._max_results = max_results

    async def search(self, raw_query: str) -> list[BookCandidate]:
        """Return up to max_results best-ranked, explained candidates for raw_query."""
        try:
            intent = await self._interpreter.extract_intent(raw_query)
        except LanguageModelError as exc:
            logger.warning("Intent extraction failed for %r: %s", raw_query, exc)
            return []

        if not intent.is_valid:
            logger.info("No usable search criteria in %r", raw_query)
            return []

        try:
            candidates = await self._searcher.search_candidates(intent)
        except MetadataFetchError as exc:
            logger.warning("Candidate search failed for %r: %s", raw_query, exc)
            return []

        await self._enrich_all(raw_query, intent, candidates)

        ranked = self.select_best(candidates)
        if not ranked:
            logger.info("None of %d candidate(s) matched %r", len(candidates), raw_query)
            return []

        try:
            return await self._explainer.explain_results(raw_query, intent, ranked)
        except LanguageModelError as exc:
            logger.warning("Explanation failed, returning unexplained results: %s", exc)
            return ranked

    async def _enrich_all(
        self, raw_query: str, intent: SearchIntent, candidates: list[BookCandidate]
    ) -> None:
        """Enrich every candidate in its own task and wait for all of them.

        If any task fails, or the caller is cancelled, the remaining tasks are
        cancelled and awaited before the error propagates, so no enrichment
        outlives the request.
        """
        tasks = [asyncio.create_task(self._enrich(raw_query, intent, c)) for c in candidates]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _enrich(self, raw_query: str, intent: SearchIntent, candidate: BookCandidate) -> None:
        """Resolve one candidate's author hierarchy and rank it.

        MUTATES candidate in place. A failed author lookup leaves the primary
        list empty, so the requested author can still match through the
        general author list at contributor strength.
        """
        try:
            details = await self._author_details.get_author_details(
                candidate.external_id, intent.title
            )
        except MetadataFetchError as exc:
            logger.warning("Author lookup failed for %s: %s", candidate.external_id, exc)
            details = AuthorDetails(primary_authors=[], contributors=[])

        candidate.primary_authors = list(details.primary_authors)
        candidate.contributors = merge_contributors(
            candidate.authors, candidate.primary_authors, details.contributors
        )
        candidate.apply_match(calculate_match(raw_query, intent, candidate, self._policy))

    def select_best(self, candidates: list[BookCandidate]) -> list[BookCandidate]:
        """Keep only the candidates at the single highest rank achieved.

        Order is preserved among equals and the result is capped at
        max_results. Unranked candidates never survive.
        """
        matched = [c for c in candidates if c.rank is not MatchRank.NONE]
        if not matched:
            return []
        top = best_rank(matched)
        return [c for c in matched if c.rank == top][: self._max_results]
