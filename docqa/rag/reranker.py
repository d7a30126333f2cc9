"""
Weighted reranker blending similarity, keyword overlap and recency.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .config import RetrievalConfig
from .keyword import KeywordScorer
from .retriever import RerankedCandidate, ScoredCandidate


def recency_boost(
    updated_at: dt.datetime,
    now: dt.datetime,
    horizon_days: float = 30.0,
) -> float:
    """Linear decay from 1 (just updated) to 0 at horizon_days."""
    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=dt.timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    age_days = (now - updated_at).total_seconds() / 86400.0
    return min(1.0, max(0.0, 1.0 - age_days / horizon_days))


@dataclass
class WeightedReranker:
    """Second-pass ranking over selected candidates."""

    scorer: KeywordScorer = field(default_factory=KeywordScorer)
    config: RetrievalConfig = field(default_factory=RetrievalConfig)

    def score(
        self,
        question: str,
        candidate: ScoredCandidate,
        now: dt.datetime,
    ) -> RerankedCandidate:
        """
        Compute the combined score of one candidate.

        Components are stored already weighted, so they sum to the combined
        score. Exact phrase hits are pinned above 1.0 and ordered among
        themselves by similarity. A keyword boost at or above the exact-match
        score without the phrase goes through the weighted blend, clamped.
        """
        cfg = self.config
        doc = candidate.document
        max_score = candidate.max_score
        boost = self.scorer.score(question, doc.title or "", doc.content or "")
        recency = recency_boost(doc.updated_at, now, cfg.recency_days)

        if self.scorer.is_exact_match(question, doc.content or ""):
            return RerankedCandidate(
                document=doc,
                combined_score=1.0 + 0.1 * max_score,
                similarity_component=0.1 * max_score,
                keyword_component=1.0,
                recency_component=0.0,
                max_score=max_score,
                keyword_boost=boost,
                exact_match=True,
            )

        keyword = min(boost / cfg.keyword_normalizer, 1.0)
        if max_score > cfg.strong_similarity:
            sim_weight, kw_weight = 0.6, 0.3
        else:
            sim_weight, kw_weight = 0.3, 0.6

        similarity_component = max_score * sim_weight
        keyword_component = keyword * kw_weight
        recency_component = recency * cfg.recency_weight
        return RerankedCandidate(
            document=doc,
            combined_score=similarity_component + keyword_component + recency_component,
            similarity_component=similarity_component,
            keyword_component=keyword_component,
            recency_component=recency_component,
            max_score=max_score,
            keyword_boost=boost,
        )

    def rerank(
        self,
        question: str,
        candidates: Iterable[ScoredCandidate],
        *,
        now: Optional[dt.datetime] = None,
    ) -> List[RerankedCandidate]:
        """
        Return the best config.final_k candidates.

        Exact phrase hits always come first; keyword-only max scores are not
        bounded by 1, so the combined score alone cannot guarantee that.
        """
        now = now or dt.datetime.now(dt.timezone.utc)
        reranked = [self.score(question, c, now) for c in candidates]
        reranked.sort(key=lambda r: (r.exact_match, r.combined_score), reverse=True)
        return reranked[: self.config.final_k]
