"""
Answer generation module for RAG pipeline.

- Context blocks and references from ranked documents
- Answer generation with an OpenAI-compatible LLM
- Deterministic fallback answers when no LLM is configured
"""

from .config import GenerationConfig
from .context_builder import build_context, context_blocks, references_for
from .fallback import NO_DOCUMENTS_MESSAGE, compose_fallback_answer
from .generator import AnswerGenerator, GeneratedAnswer
from .prompts import ANSWER_PROMPT, ANSWER_SYSTEM_PROMPT

__all__ = [
    "build_context",
    "context_blocks",
    "references_for",
    "compose_fallback_answer",
    "NO_DOCUMENTS_MESSAGE",
    "GenerationConfig",
    "ANSWER_PROMPT",
    "ANSWER_SYSTEM_PROMPT",
    "AnswerGenerator",
    "GeneratedAnswer",
]
