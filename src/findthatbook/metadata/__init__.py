# ABOUTME: Metadata package for book search intents, candidates and external providers.
# ABOUTME: Exports the core data classes and collaborator protocols used by the orchestrator.

from findthatbook.metadata.provider import (
    AuthorDetailProvider,
    AuthorDetails,
    CandidateSearcher,
    IntentInterpreter,
    ResultExplainer,
)
from findthatbook.metadata.types import BookCandidate, IntentExplanation, SearchIntent

__all__ = [
    "AuthorDetailProvider",
    "AuthorDetails",
    "BookCandidate",
    "CandidateSearcher",
    "IntentExplanation",
    "IntentInterpreter",
    "ResultExplainer",
    "SearchIntent",
]
