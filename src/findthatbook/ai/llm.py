# ABOUTME: Language-model collaborator for query interpretation and result explanation.
# ABOUTME: Wraps the OpenAI async chat API and parses its loosely formatted JSON replies.

import json
import logging
from dataclasses import dataclass
from typing import Any

import openai

from findthatbook.ai.prompts import build_explanation_prompt, build_intent_prompt
from findthatbook.metadata.types import BookCandidate, IntentExplanation, SearchIntent

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class LanguageModelError(Exception):
    """Raised when a call to the language model fails."""


@dataclass(frozen=True)
class GenerationOptions:
    """Sampling parameters passed to every completion request. None means provider default."""

    model: str = DEFAULT_MODEL
    temperature: float | None = None
    top_p: float | None = None
    max_output_tokens: int | None = None
    seed: int | None = None

    def request_kwargs(self) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"model": self.model}
        if self.temperature is not None:
            kwargs["temperature"] = self.temperature
        if self.top_p is not None:
            kwargs["top_p"] = self.top_p
        if self.max_output_tokens is not None:
            kwargs["max_tokens"] = self.max_output_tokens
        if self.seed is not None:
            kwargs["seed"] = self.seed
        return kwargs


def clean_llm_json(content: str | None) -> str:
    """Strip markdown code fences a model may wrap around JSON."""
    if not content:
        return ""
    text = content.strip()
    if text.startswith("```"):
        text = text.removeprefix("```json").removeprefix("```")
        text = text.removesuffix("```")
    return text.strip()


def _key(name: str) -> str:
    return name.replace("_", "").lower()


def _field(obj: dict[str, Any], name: str) -> Any:
    """Look up a JSON field regardless of snake_case, camelCase or PascalCase."""
    wanted = _key(name)
    for key, value in obj.items():
        if _key(key) == wanted:
            return value
    return None


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def parse_intent(content: str | None, raw_query: str) -> SearchIntent:
    """Build a SearchIntent from a model reply.

    A reply that is not a JSON object falls back to an intent that searches
    the whole raw query as keywords.
    """
    try:
        data = json.loads(clean_llm_json(content))
    except ValueError:
        data = None
    if not isinstance(data, dict):
        logger.warning("Unparseable intent reply, searching raw query as keywords")
        return SearchIntent(keywords=[raw_query])

    keywords = _field(data, "keywords") or []
    if not isinstance(keywords, list):
        keywords = [keywords]

    explanation = None
    raw_explanation = _field(data, "explanation")
    if isinstance(raw_explanation, dict):
        explanation = IntentExplanation(
            title_reason=_optional_str(_field(raw_explanation, "title_reason")),
            author_reason=_optional_str(_field(raw_explanation, "author_reason")),
            keywords_reason=_optional_str(_field(raw_explanation, "keywords_reason")),
        )

    return SearchIntent(
        title=_optional_str(_field(data, "title")),
        author=_optional_str(_field(data, "author")),
        keywords=[str(k) for k in keywords if str(k).strip()],
        extracted_title_fragment=_optional_str(_field(data, "extracted_title_fragment")),
        extracted_author_fragment=_optional_str(_field(data, "extracted_author_fragment")),
        explanation=explanation,
    )


def parse_explanations(content: str | None) -> list[str] | None:
    """Pull the explanation of each item out of a JSON array reply, or None if unparseable."""
    try:
        data = json.loads(clean_llm_json(content))
    except ValueError:
        return None
    if not isinstance(data, list):
        return None
    return [
        str(_field(item, "explanation") or "") if isinstance(item, dict) else ""
        for item in data
    ]


def _describe_intent(intent: SearchIntent) -> list[str]:
    reasons = intent.explanation or IntentExplanation()
    return [
        f"Title: {intent.title or ''} (reason: {reasons.title_reason or ''})",
        f"Author: {intent.author or ''} (reason: {reasons.author_reason or ''})",
        f"Keywords: {', '.join(intent.keywords)} (reason: {reasons.keywords_reason or ''})",
    ]


def _describe_candidate(candidate: BookCandidate) -> dict[str, Any]:
    return {
        "title": candidate.title,
        "authors": candidate.author,
        "first_publish_year": candidate.first_publish_year,
        "match_type": candidate.match_type.value,
        "author_status": candidate.author_status.value,
    }


class LanguageModelService:
    """Intent interpreter and result explainer backed by an OpenAI chat model.

    Implements both IntentInterpreter and ResultExplainer. The client is
    injectable so tests can supply a fake with the same
    chat.completions.create coroutine.
    """

    def __init__(
        self,
        client: openai.AsyncOpenAI | None = None,
        *,
        api_key: str | None = None,
        options: GenerationOptions | None = None,
    ) -> None:
        self._client = client or openai.AsyncOpenAI(api_key=api_key)
        self._options = options or GenerationOptions()

    async def _complete(self, prompt: str) -> str:
        """Send a single-turn prompt and return the reply text.

        Raises:
            LanguageModelError: On any API, network or authentication failure.
        """
        try:
            response = await self._client.chat.completions.create(
                messages=[{"role": "user", "content": prompt}],
                **self._options.request_kwargs(),
            )
        except openai.OpenAIError as exc:
            raise LanguageModelError(f"Completion request failed: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def extract_intent(self, raw_query: str) -> SearchIntent:
        """Interpret raw_query into a SearchIntent.

        Raises:
            LanguageModelError: When the model cannot be reached.
        """
        content = await self._complete(build_intent_prompt(raw_query))
        intent = parse_intent(content, raw_query)
        logger.debug(
            "Interpreted %r as title=%r author=%r keywords=%r",
            raw_query,
            intent.title,
            intent.author,
            intent.keywords,
        )
        return intent

    async def explain_results(
        self, raw_query: str, intent: SearchIntent, candidates: list[BookCandidate]
    ) -> list[BookCandidate]:
        """Fill in candidate explanations, merged back by position.

        An unparseable reply leaves the candidates unexplained. An empty list
        is returned without calling the model.

        Raises:
            LanguageModelError: When the model cannot be reached.
        """
        if not candidates:
            return candidates

        prompt = build_explanation_prompt(
            raw_query,
            _describe_intent(intent),
            [_describe_candidate(c) for c in candidates],
        )
        explanations = parse_explanations(await self._complete(prompt))
        if explanations is None:
            logger.warning("Unparseable explanation reply, returning results unexplained")
            return candidates

        for candidate, explanation in zip(candidates, explanations):
            candidate.explanation = explanation
        return candidates
