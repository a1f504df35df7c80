# ABOUTME: Runtime settings for findthatbook, read from environment variables.
# ABOUTME: Defaults live here as module constants; CLI options override per invocation.

import os
from collections.abc import Mapping
from dataclasses import dataclass

from findthatbook.ai.llm import DEFAULT_MODEL, GenerationOptions
from findthatbook.matching.scoring import MatchPolicy
from findthatbook.metadata.openlibrary import DEFAULT_OPENLIBRARY_URL
from findthatbook.metadata.openlibrary_parser import DEFAULT_COVERS_URL

DEFAULT_TIMEOUT = 60.0

_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass
class Settings:
    """Everything needed to wire a BookSearchService."""

    openai_api_key: str | None = None
    model: str = DEFAULT_MODEL
    temperature: float | None = None
    top_p: float | None = None
    max_output_tokens: int | None = None
    seed: int | None = None
    openlibrary_url: str = DEFAULT_OPENLIBRARY_URL
    covers_url: str = DEFAULT_COVERS_URL
    title_only_fallback: bool = True
    timeout: float = DEFAULT_TIMEOUT

    @property
    def generation_options(self) -> GenerationOptions:
        return GenerationOptions(
            model=self.model,
            temperature=self.temperature,
            top_p=self.top_p,
            max_output_tokens=self.max_output_tokens,
            seed=self.seed,
        )

    @property
    def match_policy(self) -> MatchPolicy:
        return MatchPolicy(title_only_fallback=self.title_only_fallback)


def _parse_number(env: Mapping[str, str], name: str, kind: type) -> float | int | None:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        return kind(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a {kind.__name__}, got {raw!r}") from exc


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Recognized variables: OPENAI_API_KEY, FINDTHATBOOK_MODEL,
    FINDTHATBOOK_TEMPERATURE, FINDTHATBOOK_TOP_P, FINDTHATBOOK_MAX_OUTPUT_TOKENS,
    FINDTHATBOOK_SEED, FINDTHATBOOK_OPENLIBRARY_URL, FINDTHATBOOK_COVERS_URL,
    FINDTHATBOOK_TITLE_ONLY_FALLBACK and FINDTHATBOOK_TIMEOUT.

    Args:
        env: Mapping to read from. Defaults to os.environ.

    Raises:
        ConfigError: When a numeric variable cannot be parsed.
    """
    env = os.environ if env is None else env
    timeout = _parse_number(env, "FINDTHATBOOK_TIMEOUT", float)
    fallback = env.get("FINDTHATBOOK_TITLE_ONLY_FALLBACK", "").strip().lower()

    return Settings(
        openai_api_key=env.get("OPENAI_API_KEY") or None,
        model=env.get("FINDTHATBOOK_MODEL") or DEFAULT_MODEL,
        temperature=_parse_number(env, "FINDTHATBOOK_TEMPERATURE", float),
        top_p=_parse_number(env, "FINDTHATBOOK_TOP_P", float),
        max_output_tokens=_parse_number(env, "FINDTHATBOOK_MAX_OUTPUT_TOKENS", int),
        seed=_parse_number(env, "FINDTHATBOOK_SEED", int),
        openlibrary_url=env.get("FINDTHATBOOK_OPENLIBRARY_URL") or DEFAULT_OPENLIBRARY_URL,
        covers_url=env.get("FINDTHATBOOK_COVERS_URL") or DEFAULT_COVERS_URL,
        title_only_fallback=fallback not in _FALSE_VALUES,
        timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
    )
