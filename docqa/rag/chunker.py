"""
Sentence-aware text chunking with character overlap, and document-level
embeddings averaged over chunks.
"""

from __future__ import annotations

import asyncio
from typing import List

import numpy as np

from .embedder import Embedder, average_vectors
from .utils import split_sentences

DEFAULT_MAX_LEN = 2000
DEFAULT_OVERLAP = 200


def _split_words(sentence: str, max_len: int) -> List[str]:
    """Greedy word-boundary split of a sentence longer than max_len."""
    pieces: List[str] = []
    buf = ""
    for word in sentence.split():
        candidate = f"{buf} {word}" if buf else word
        if len(candidate) <= max_len:
            buf = candidate
            continue
        if buf:
            pieces.append(buf)
        buf = word
    if buf:
        pieces.append(buf)
    return pieces


def chunk_text(
    text: str,
    max_len: int = DEFAULT_MAX_LEN,
    overlap: int = DEFAULT_OVERLAP,
) -> List[str]:
    """
    Split text into chunks of at most max_len characters.

    Sentences are packed greedily. After a flush, the next chunk starts with
    the last `overlap` characters of the previous one so that context spans
    chunk boundaries. A sentence longer than max_len is split on word
    boundaries without overlap; only a single word longer than max_len can
    produce an oversized chunk.
    """
    if max_len <= 0:
        raise ValueError(f"max_len must be positive, got {max_len}")
    if overlap < 0 or overlap >= max_len:
        raise ValueError(f"overlap must be in [0, max_len), got {overlap}")

    chunks: List[str] = []
    buf = ""
    for raw in split_sentences(text):
        sentence = raw.strip()
        candidate = f"{buf} {sentence}" if buf else sentence
        if len(candidate) <= max_len:
            buf = candidate
            continue

        if buf:
            chunks.append(buf)

        if len(sentence) > max_len:
            pieces = _split_words(sentence, max_len)
            chunks.extend(pieces[:-1])
            buf = pieces[-1] if pieces else ""
            continue

        carry = chunks[-1][-overlap:] if overlap > 0 and chunks else ""
        buf = f"{carry} {sentence}".strip()
        if len(buf) > max_len:
            buf = sentence

    if buf:
        chunks.append(buf)
    return [c for c in chunks if c.strip()]


async def embed_document(
    embedder: Embedder,
    text: str,
    max_len: int = DEFAULT_MAX_LEN,
    overlap: int = DEFAULT_OVERLAP,
) -> np.ndarray:
    """Embed a document; long texts are chunked and their vectors averaged."""
    chunks = chunk_text(text, max_len=max_len, overlap=overlap)
    if len(chunks) <= 1:
        return await embedder.embed(text)
    vectors = await asyncio.gather(*(embedder.embed(c) for c in chunks))
    return average_vectors(vectors)
