"""
Answer generator: builds context, calls LLM, returns answer text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from docqa.llm.client import ChatClient
from docqa.rag.retriever import ContextBlock, Reference

from .config import GenerationConfig
from .context_builder import build_context
from .prompts import ANSWER_PROMPT, ANSWER_SYSTEM_PROMPT


@dataclass
class GeneratedAnswer:
    """Result of RAG answer generation."""

    answer: str
    references: List[Reference]


class AnswerGenerator:
    """Generate answers from a question and context blocks using the LLM."""

    def __init__(self, client: ChatClient, config: Optional[GenerationConfig] = None):
        self.client = client
        self.config = config or GenerationConfig()

    def _prompt(self, question: str, blocks: Sequence[ContextBlock]) -> str:
        return ANSWER_PROMPT.format(query=question, context=build_context(blocks))

    def generate(self, question: str, blocks: Sequence[ContextBlock]) -> GeneratedAnswer:
        """Call the LLM once; an empty answer means the call failed."""
        answer_text = self.client.generate_single(
            self._prompt(question, blocks),
            system=ANSWER_SYSTEM_PROMPT,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            top_p=self.config.top_p,
        )
        return GeneratedAnswer(
            answer=answer_text or "",
            references=[Reference(document_id=b.document_id, title=b.title) for b in blocks],
        )

    def generate_stream(self, question: str, blocks: Sequence[ContextBlock]) -> Iterator[str]:
        """Yield token chunks from the LLM."""
        for chunk in self.client.stream(
            self._prompt(question, blocks),
            system=ANSWER_SYSTEM_PROMPT,
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
            top_p=self.config.top_p,
        ):
            if chunk:
                yield chunk
