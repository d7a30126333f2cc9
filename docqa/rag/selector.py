"""
Adaptive candidate selection sized by the length of the question.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from .config import RetrievalConfig
from .retriever import ScoredCandidate
from .utils import word_count

logger = logging.getLogger(__name__)


@dataclass
class SelectionPolicy:
    """Thresholds and depth chosen for one question."""

    similarity_threshold: float
    keyword_threshold: float
    top_k: int


def policy_for(question: str, config: RetrievalConfig | None = None) -> SelectionPolicy:
    """Short questions get lower thresholds and a deeper search."""
    config = config or RetrievalConfig()
    if word_count(question) <= config.short_query_words:
        return SelectionPolicy(
            similarity_threshold=config.short_similarity_threshold,
            keyword_threshold=config.short_keyword_threshold,
            top_k=config.short_top_k,
        )
    return SelectionPolicy(
        similarity_threshold=config.long_similarity_threshold,
        keyword_threshold=config.long_keyword_threshold,
        top_k=config.long_top_k,
    )


def select_candidates(
    question: str,
    scored: Sequence[ScoredCandidate],
    config: RetrievalConfig | None = None,
) -> List[ScoredCandidate]:
    """
    Filter and cut the scored pool before reranking.

    A candidate passes if it meets either the similarity or the keyword
    threshold. When nothing passes the unfiltered pool is used. The result
    is widened to at least config.min_candidates whenever the pool allows.
    """
    config = config or RetrievalConfig()
    policy = policy_for(question, config)

    ranked = sorted(scored, key=lambda c: c.max_score, reverse=True)
    filtered = [
        c
        for c in ranked
        if c.max_score >= policy.similarity_threshold
        or c.max_score >= policy.keyword_threshold
    ]
    logger.debug("Filtered %d docs to %d above threshold", len(ranked), len(filtered))

    pool = filtered if filtered else ranked
    selected = pool[: policy.top_k]
    if len(selected) < config.min_candidates:
        selected = ranked[: max(config.min_candidates, len(selected))]
    return selected
