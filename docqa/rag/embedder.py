"""
Model-free text embeddings using hashed character trigrams.

Each token contributes its character trigrams to a fixed number of buckets;
the bucket counts are L2-normalized. The result is deterministic across
processes and needs no trained model.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)

VECTOR_DIMENSION = 384

_MASK32 = 0xFFFFFFFF
_BUCKET_MASK = 0x1FFFFF
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_WHITESPACE_RE = re.compile(r"\s+")

VectorLike = Union[np.ndarray, Sequence[float]]


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply."""
    return (a * b) & _MASK32


def hash_trigram(text: str, seed: int = 0) -> int:
    """Two-lane 32-bit string hash; returns a 21-bit bucket key."""
    h1 = (0xDEADBEEF ^ seed) & _MASK32
    h2 = (0x41C6CE57 ^ seed) & _MASK32
    for ch in text:
        code = ord(ch)
        h1 = _imul(h1 ^ code, 2654435761)
        h2 = _imul(h2 ^ code, 1597334677)
    h1 = _imul(h1 ^ (h1 >> 16), 2246822507) ^ _imul(h2 ^ (h2 >> 13), 3266489909)
    h2 = _imul(h2 ^ (h2 >> 16), 2246822507) ^ _imul(h1 ^ (h1 >> 13), 3266489909)
    return (h2 & _BUCKET_MASK) ^ (h1 & _BUCKET_MASK)


class Embedder(Protocol):
    """Anything that turns text into a fixed-length vector."""

    dimension: int

    async def embed(self, text: str) -> np.ndarray:
        ...


@dataclass
class HashingEmbedder:
    """Bag-of-character-trigrams embedder (hashing trick)."""

    dimension: int = VECTOR_DIMENSION

    def __post_init__(self) -> None:
        if self.dimension <= 0:
            raise ValueError(f"dimension must be positive, got {self.dimension}")

    def embed_sync(self, text: str) -> np.ndarray:
        """Embed text without going through the event loop."""
        normalized = _WHITESPACE_RE.sub(" ", (text or "").lower()).strip()
        vec = np.zeros(self.dimension, dtype=np.float64)
        if not normalized:
            return vec

        for tok in _NON_ALNUM_RE.split(normalized):
            if not tok:
                continue
            for i in range(len(tok)):
                tri = tok[i : i + 3]
                vec[hash_trigram(tri, i) % self.dimension] += 1.0

        norm = float(np.linalg.norm(vec))
        if norm > 0:
            vec /= norm
        return vec

    async def embed(self, text: str) -> np.ndarray:
        return self.embed_sync(text)


@dataclass
class EmbeddingOutcome:
    """Either a vector or the reason there is none."""

    vector: Optional[np.ndarray] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.vector is not None


async def try_embed(embedder: Embedder, text: str) -> EmbeddingOutcome:
    """Embed text, turning any backend failure into an empty outcome."""
    try:
        vector = await embedder.embed(text)
    except Exception as e:
        logger.warning("Embedding failed, falling back to keyword scoring: %s", e)
        return EmbeddingOutcome(error=str(e))
    if vector is None or len(vector) == 0:
        return EmbeddingOutcome(error="empty embedding")
    return EmbeddingOutcome(vector=np.asarray(vector, dtype=np.float64))


def cosine_similarity(a: Optional[VectorLike], b: Optional[VectorLike]) -> float:
    """Cosine similarity; 0.0 for empty, mismatched or zero-norm vectors."""
    if a is None or b is None:
        return 0.0
    va = np.asarray(a, dtype=np.float64).ravel()
    vb = np.asarray(b, dtype=np.float64).ravel()
    if va.size == 0 or vb.size == 0 or va.size != vb.size:
        return 0.0
    na = float(np.linalg.norm(va))
    nb = float(np.linalg.norm(vb))
    if na == 0.0 or nb == 0.0:
        return 0.0
    sim = float(np.dot(va, vb)) / (na * nb)
    return max(-1.0, min(1.0, sim))


def average_vectors(vectors: Sequence[VectorLike]) -> np.ndarray:
    """Component-wise mean of equal-length vectors (not re-normalized)."""
    if not vectors:
        return np.zeros(0, dtype=np.float64)
    stacked = np.vstack([np.asarray(v, dtype=np.float64) for v in vectors])
    return stacked.mean(axis=0)
