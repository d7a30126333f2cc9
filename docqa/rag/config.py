"""
Configuration for the document retrieval pipeline.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional


@dataclass
class RetrievalConfig:
    """Configuration for document retrieval and reranking."""

    vector_dimension: int = 384
    max_documents: int = 50
    num_variations: int = 5

    # Adaptive thresholds, keyed on the word count of the original question.
    short_query_words: int = 4
    short_similarity_threshold: float = 0.12
    short_keyword_threshold: float = 8.0
    short_top_k: int = 15
    long_similarity_threshold: float = 0.18
    long_keyword_threshold: float = 12.0
    long_top_k: int = 10
    min_candidates: int = 3

    exact_match_score: float = 100.0
    keyword_normalizer: float = 50.0
    strong_similarity: float = 0.2
    recency_days: float = 30.0
    recency_weight: float = 0.1
    final_k: int = 3

    context_snippets: int = 3
    fallback_snippets: int = 2
    max_snippet_sentences: int = 40

    chunk_max_len: int = 2000
    chunk_overlap: int = 200

    timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "RetrievalConfig":
        """Build a config, taking the retrieval timeout from RETRIEVAL_TIMEOUT."""
        config = cls()
        timeout = os.getenv("RETRIEVAL_TIMEOUT")
        if timeout:
            config.timeout = float(timeout)
        return config


DEFAULT_STOP_WORDS = frozenset(
    {
        "to", "in", "for", "if", "do", "am", "is", "are", "have", "has",
        "had", "will", "would", "should", "could", "can", "may", "might",
        "the", "a", "an", "and", "or", "but", "so", "with", "from", "at",
        "by", "on", "up", "down", "out", "off", "over", "under", "again",
        "further", "then", "once",
    }
)

DEFAULT_IMPORTANT_TERMS = frozenset(
    {
        "resign", "notice", "give", "want", "need", "much", "work", "home",
        "remote", "allowed", "month", "written", "least", "employees",
        "resigning",
    }
)

DEFAULT_SYNONYMS: Dict[str, List[str]] = {
    "work": ["work", "working", "job", "employment", "employee"],
    "home": ["home", "remote", "telecommute", "telework"],
    "remote": ["remote", "home", "telecommute", "telework", "distance"],
    "allowed": ["allowed", "permitted", "eligible", "can", "may"],
    "often": ["often", "frequently", "frequency", "times", "days"],
    "resign": ["resign", "resigning", "resignation", "quit", "leave", "exit", "departure"],
    "notice": ["notice", "notification", "advance", "warning", "period"],
    "give": ["give", "provide", "submit", "deliver", "send"],
    "want": ["want", "wish", "desire", "need", "require"],
    "much": ["much", "many", "long", "duration", "time", "period"],
    "need": ["need", "require", "must", "should", "have"],
}


@dataclass(frozen=True)
class KeywordVocabulary:
    """Stop words, domain terms and synonym table used by keyword scoring."""

    stop_words: FrozenSet[str] = DEFAULT_STOP_WORDS
    important_terms: FrozenSet[str] = DEFAULT_IMPORTANT_TERMS
    synonyms: Dict[str, List[str]] = field(default_factory=lambda: dict(DEFAULT_SYNONYMS))
    direct_weight: float = 3.0
    synonym_weight: float = 2.5


def load_vocabulary(path: Path | None = None) -> KeywordVocabulary:
    """
    Load a keyword vocabulary from a JSON file.

    Keys not present in the file keep their defaults. Without a path, the
    KEYWORD_VOCAB_PATH environment variable is consulted; if neither is set
    the built-in vocabulary is returned.
    """
    if path is None:
        env_path = os.getenv("KEYWORD_VOCAB_PATH")
        if not env_path:
            return KeywordVocabulary()
        path = Path(env_path)
    if not path.exists():
        raise FileNotFoundError(f"keyword vocabulary not found at {path}")

    with path.open("r", encoding="utf-8") as f:
        obj = json.load(f)

    defaults = KeywordVocabulary()
    return KeywordVocabulary(
        stop_words=frozenset(t.lower() for t in obj.get("stop_words", defaults.stop_words)),
        important_terms=frozenset(
            t.lower() for t in obj.get("important_terms", defaults.important_terms)
        ),
        synonyms={
            k.lower(): [s.lower() for s in v]
            for k, v in obj.get("synonyms", defaults.synonyms).items()
        },
        direct_weight=float(obj.get("direct_weight", defaults.direct_weight)),
        synonym_weight=float(obj.get("synonym_weight", defaults.synonym_weight)),
    )
