"""
Utility functions for RAG module.
"""

from __future__ import annotations

import re
from typing import List, Optional

TOKEN_RE = re.compile(r"[a-z0-9]+")
SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")


def tokenize(text: Optional[str]) -> List[str]:
    """Lower-case text and extract runs of ASCII letters and digits."""
    if not text:
        return []
    return TOKEN_RE.findall(text.lower())


def split_sentences(text: Optional[str]) -> List[str]:
    """Split text after '.', '!' or '?' followed by whitespace."""
    if not text:
        return []
    return [s for s in SENTENCE_SPLIT_RE.split(text) if s.strip()]


def word_count(text: Optional[str]) -> int:
    """Number of whitespace-separated words."""
    return len((text or "").split())
