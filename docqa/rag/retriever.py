"""
Result types exchanged between the retrieval pipeline and its consumers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .index import Document


@dataclass
class ScoredCandidate:
    """Best score a document received across all query variations."""

    document: Document
    max_score: float


@dataclass
class RerankedCandidate:
    """A candidate with every reranking signal populated."""

    document: Document
    combined_score: float
    similarity_component: float
    keyword_component: float
    recency_component: float
    max_score: float
    keyword_boost: float
    exact_match: bool = False


@dataclass
class RetrievalResult:
    """Final ranked document with its evidence snippets."""

    candidate: RerankedCandidate
    snippets: List[str] = field(default_factory=list)

    @property
    def document(self) -> Document:
        return self.candidate.document

    @property
    def score(self) -> float:
        return self.candidate.combined_score


@dataclass
class ContextBlock:
    """Evidence handed to answer generation."""

    document_id: str
    title: str
    snippets: List[str]


@dataclass
class Reference:
    """Citation for a document used in an answer."""

    document_id: str
    title: str
