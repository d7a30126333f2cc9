"""
Sentence-level evidence extraction for selected documents.
"""

from __future__ import annotations

from typing import List, Optional

from .keyword import KeywordScorer
from .utils import split_sentences, tokenize

MAX_SENTENCES = 40
TRUNCATE_OVER = 220
TRUNCATE_TO = 200
ELLIPSIS = "…"


def _truncate(sentence: str) -> str:
    if len(sentence) > TRUNCATE_OVER:
        return sentence[:TRUNCATE_TO] + ELLIPSIS
    return sentence


def extract_snippets(
    query: str,
    title: str,
    content: Optional[str],
    max_snippets: int = 2,
    *,
    scorer: Optional[KeywordScorer] = None,
    max_sentences: int = MAX_SENTENCES,
) -> List[str]:
    """
    Pick the sentences of a document most likely to answer the query.

    An exact phrase hit returns only the first sentence containing it.
    Otherwise sentences are ranked by keyword score; if none scores, the
    first sentence is used. Documents without content fall back to the title.
    """
    if not content or not content.strip():
        return [title] if title else []

    scorer = scorer or KeywordScorer()
    sentences = [s.strip() for s in split_sentences(content)]

    if scorer.is_exact_match(query, content):
        needle = query.lower()
        for sentence in sentences:
            if needle in sentence.lower():
                return [sentence]

    terms = " ".join(dict.fromkeys(tokenize(query)))
    window = sentences[:max_sentences]
    scored = [(s, scorer.score(terms, "", s)) for s in window]
    ranked = sorted((x for x in scored if x[1] > 0), key=lambda x: x[1], reverse=True)
    snippets = [_truncate(s) for s, _ in ranked[:max_snippets]]
    if snippets:
        return snippets
    return [_truncate(window[0])] if window else [title] if title else []
