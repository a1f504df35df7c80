# ABOUTME: Language-model collaborators: query interpretation and result explanation.
# ABOUTME: Exports the OpenAI-backed service and its error type.

from findthatbook.ai.llm import GenerationOptions, LanguageModelError, LanguageModelService

__all__ = ["GenerationOptions", "LanguageModelError", "LanguageModelService"]
