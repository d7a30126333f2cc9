"""
Lexical relevance scoring with synonym expansion and an exact-phrase override.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .config import KeywordVocabulary
from .utils import tokenize

EXACT_MATCH_SCORE = 100.0


@dataclass
class KeywordScorer:
    """Term-frequency scorer biased toward a domain vocabulary."""

    vocabulary: KeywordVocabulary = field(default_factory=KeywordVocabulary)
    exact_match_score: float = EXACT_MATCH_SCORE

    def score(self, query: str, title: str, content: str) -> float:
        """
        Score how well title + content match the query.

        A case-insensitive occurrence of the whole query inside the content
        returns exact_match_score and skips term scoring.
        """
        title = title or ""
        content = content or ""
        q_terms = tokenize(query)
        text_terms = tokenize(f"{title} {content}")
        if not q_terms or not text_terms:
            return 0.0

        if self.is_exact_match(query, content):
            return self.exact_match_score

        vocab = self.vocabulary
        freq = Counter(text_terms)
        score = 0.0
        for term in q_terms:
            important = term in vocab.important_terms
            if term in vocab.stop_words and not important:
                continue

            direct = freq.get(term, 0)
            if direct:
                score += direct * (vocab.direct_weight if important else 1.0)

            for synonym in vocab.synonyms.get(term, ()):
                hits = freq.get(synonym, 0)
                if hits:
                    score += hits * (vocab.synonym_weight if important else 1.0)

        return score

    def is_exact_match(self, query: str, content: str) -> bool:
        """True when the whole query appears verbatim (case-insensitive) in content."""
        if not tokenize(query) or not content:
            return False
        return query.lower() in content.lower()
