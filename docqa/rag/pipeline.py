"""
End-to-end retrieval: expand, score, select, rerank and extract snippets.
"""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .aggregator import aggregate_scores
from .config import RetrievalConfig, load_vocabulary
from .embedder import Embedder, HashingEmbedder
from .index import Document
from .keyword import KeywordScorer
from .query_expander import QueryExpander
from .reranker import WeightedReranker
from .retriever import RetrievalResult
from .selector import select_candidates
from .snippets import extract_snippets

logger = logging.getLogger(__name__)


@dataclass
class RetrievalPipeline:
    """Retrieval and reranking over one request's document pool."""

    embedder: Embedder
    scorer: KeywordScorer
    expander: QueryExpander
    config: RetrievalConfig = field(default_factory=RetrievalConfig)

    def __post_init__(self) -> None:
        self.reranker = WeightedReranker(scorer=self.scorer, config=self.config)

    @classmethod
    def create(
        cls,
        *,
        config: RetrievalConfig | None = None,
        expander: QueryExpander | None = None,
        embedder: Embedder | None = None,
        scorer: KeywordScorer | None = None,
    ) -> "RetrievalPipeline":
        """Create a pipeline with the hashing embedder and configured vocabulary."""
        config = config or RetrievalConfig()
        return cls(
            embedder=embedder or HashingEmbedder(dimension=config.vector_dimension),
            scorer=scorer or KeywordScorer(
                vocabulary=load_vocabulary(),
                exact_match_score=config.exact_match_score,
            ),
            expander=expander or QueryExpander(num_variations=config.num_variations),
            config=config,
        )

    async def retrieve(
        self,
        question: str,
        documents: Sequence[Document],
        *,
        now: Optional[dt.datetime] = None,
        max_snippets: Optional[int] = None,
    ) -> List[RetrievalResult]:
        """
        Rank documents for a question.

        Returns at most config.final_k results, each with its snippets. An
        empty pool gives an empty list.
        """
        if not documents:
            logger.info("No documents to search for question %r", question)
            return []

        queries = await self.expander.working_set(question)
        scored = await aggregate_scores(queries, documents, self.embedder, self.scorer)
        candidates = select_candidates(question, scored, self.config)
        reranked = self.reranker.rerank(question, candidates, now=now)

        n_snippets = max_snippets if max_snippets is not None else self.config.context_snippets
        results = [
            RetrievalResult(
                candidate=r,
                snippets=self.snippets_for(question, r.document, n_snippets),
            )
            for r in reranked
        ]
        logger.info(
            "Retrieved %d of %d documents for %r (%d candidates)",
            len(results),
            len(documents),
            question,
            len(candidates),
        )
        return results

    def snippets_for(self, question: str, document: Document, max_snippets: int) -> List[str]:
        return extract_snippets(
            question,
            document.title or "",
            document.content,
            max_snippets,
            scorer=self.scorer,
            max_sentences=self.config.max_snippet_sentences,
        )
