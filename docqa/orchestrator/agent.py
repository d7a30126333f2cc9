"""
Document assistant: retrieval over the recent document window, then answer
generation with deterministic fallbacks.
"""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from docqa.generation import (
    AnswerGenerator,
    compose_fallback_answer,
    context_blocks,
    references_for,
)
from docqa.rag.index import Document, recent_window
from docqa.rag.pipeline import RetrievalPipeline
from docqa.rag.retriever import ContextBlock, Reference, RerankedCandidate, RetrievalResult

logger = logging.getLogger(__name__)


@dataclass
class AssistantResponse:
    """Answer plus the evidence it was built from."""

    answer: str
    references: List[Reference] = field(default_factory=list)
    context_blocks: List[ContextBlock] = field(default_factory=list)
    ranked: List[RerankedCandidate] = field(default_factory=list)
    used_fallback: bool = False


class DocumentAssistant:
    """Answer questions over one company's documents."""

    def __init__(
        self,
        pipeline: RetrievalPipeline,
        generator: Optional[AnswerGenerator] = None,
    ):
        self.pipeline = pipeline
        self.generator = generator
        self.config = pipeline.config

    async def answer(
        self,
        question: str,
        documents: Sequence[Document],
        *,
        now: Optional[dt.datetime] = None,
    ) -> AssistantResponse:
        """Retrieve, then generate; degraded paths return a plain-text answer."""
        pool = recent_window(documents, self.config.max_documents)

        try:
            results = await asyncio.wait_for(
                self.pipeline.retrieve(question, pool, now=now),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Retrieval timed out after %ss; answering from unscored documents",
                self.config.timeout,
            )
            return self._unscored_fallback(question, pool)

        blocks = context_blocks(results)
        references = references_for(results)
        ranked = [r.candidate for r in results]

        if self.generator is None or not results:
            return AssistantResponse(
                answer=self._fallback_text(question, results),
                references=references,
                context_blocks=blocks,
                ranked=ranked,
                used_fallback=True,
            )

        generated = await asyncio.to_thread(self.generator.generate, question, blocks)
        if not generated.answer.strip():
            logger.warning("LLM returned an empty answer; using fallback text")
            return AssistantResponse(
                answer=self._fallback_text(question, results),
                references=references,
                context_blocks=blocks,
                ranked=ranked,
                used_fallback=True,
            )

        return AssistantResponse(
            answer=generated.answer,
            references=generated.references,
            context_blocks=blocks,
            ranked=ranked,
        )

    def _fallback_text(self, question: str, results: Sequence[RetrievalResult]) -> str:
        n = self.config.fallback_snippets
        blocks = [
            ContextBlock(
                document_id=r.document.id,
                title=r.document.title,
                snippets=self.pipeline.snippets_for(question, r.document, n),
            )
            for r in results
        ]
        return compose_fallback_answer(question, blocks)

    def _unscored_fallback(self, question: str, pool: Sequence[Document]) -> AssistantResponse:
        n = self.config.fallback_snippets
        blocks = [
            ContextBlock(
                document_id=doc.id,
                title=doc.title,
                snippets=self.pipeline.snippets_for(question, doc, n),
            )
            for doc in pool[: self.config.final_k]
        ]
        return AssistantResponse(
            answer=compose_fallback_answer(question, blocks),
            references=[Reference(document_id=b.document_id, title=b.title) for b in blocks],
            context_blocks=blocks,
            used_fallback=True,
        )
