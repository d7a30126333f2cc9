"""
Score every document against every query variation and keep the best score
per document.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Sequence

from .embedder import Embedder, cosine_similarity, try_embed
from .index import Document
from .keyword import KeywordScorer
from .retriever import ScoredCandidate

logger = logging.getLogger(__name__)


class MaxScoreTable:
    """
    Per-request running maximum of scores, keyed by document id.

    Documents repeating an id already in the pool are dropped; the first
    occurrence wins.
    """

    def __init__(self, documents: Sequence[Document]):
        self._documents: List[Document] = []
        seen = set()
        for doc in documents:
            if doc.id in seen:
                logger.warning("Duplicate document id %r in pool; keeping the first", doc.id)
                continue
            seen.add(doc.id)
            self._documents.append(doc)
        self._scores: Dict[str, float] = {}

    @property
    def documents(self) -> List[Document]:
        return list(self._documents)

    def update(self, scores: Sequence[float]) -> None:
        """Fold one variation's scores (aligned with the documents) into the table."""
        if len(scores) != len(self._documents):
            raise ValueError(
                f"expected {len(self._documents)} scores, got {len(scores)}"
            )
        for doc, score in zip(self._documents, scores):
            best = self._scores.get(doc.id)
            if best is None or score > best:
                self._scores[doc.id] = score

    def candidates(self) -> List[ScoredCandidate]:
        """Scored candidates in document-pool order."""
        return [
            ScoredCandidate(document=doc, max_score=self._scores[doc.id])
            for doc in self._documents
            if doc.id in self._scores
        ]


async def score_variation(
    query: str,
    documents: Sequence[Document],
    embedder: Embedder,
    scorer: KeywordScorer,
) -> List[float]:
    """
    Score all documents for one query variation.

    Cosine similarity is used when both the query and the document have
    vectors; otherwise the keyword score of this variation.
    """
    outcome = await try_embed(embedder, query)
    scores: List[float] = []
    for doc in documents:
        if outcome.ok and doc.embedding is not None:
            scores.append(cosine_similarity(outcome.vector, doc.embedding))
        else:
            scores.append(scorer.score(query, doc.title or "", doc.content or ""))
    return scores


async def aggregate_scores(
    queries: Sequence[str],
    documents: Sequence[Document],
    embedder: Embedder,
    scorer: KeywordScorer,
) -> List[ScoredCandidate]:
    """
    Max-reduce scores over the product of query variations and documents.

    Variations are scored concurrently; the reduction runs once all of them
    have finished, so the result does not depend on completion order.
    """
    table = MaxScoreTable(documents)
    pool = table.documents
    if not pool or not queries:
        return table.candidates()

    per_variation = await asyncio.gather(
        *(score_variation(q, pool, embedder, scorer) for q in queries)
    )
    for scores in per_variation:
        table.update(scores)

    logger.debug("Aggregated %d variations over %d documents", len(queries), len(pool))
    return table.candidates()
