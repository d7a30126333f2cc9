"""
RAG (Retrieval-Augmented Generation) module.

Provides retrieval components for question answering over company documents:
- Hashed character-trigram embeddings and cosine similarity
- Sentence-aware chunking
- Keyword scoring with synonym expansion
- Multi-query expansion
- Max-over-variations aggregation, adaptive selection and weighted reranking
- Snippet extraction
"""

from .aggregator import MaxScoreTable, aggregate_scores
from .chunker import chunk_text, embed_document
from .config import KeywordVocabulary, RetrievalConfig, load_vocabulary
from .embedder import (
    Embedder,
    EmbeddingOutcome,
    HashingEmbedder,
    average_vectors,
    cosine_similarity,
)
from .index import Document, embed_documents, load_documents, recent_window, save_documents
from .keyword import KeywordScorer
from .pipeline import RetrievalPipeline
from .query_expander import QueryExpander
from .reranker import WeightedReranker
from .retriever import (
    ContextBlock,
    RerankedCandidate,
    Reference,
    RetrievalResult,
    ScoredCandidate,
)
from .selector import select_candidates
from .snippets import extract_snippets
from .utils import tokenize

__all__ = [
    "Document",
    "load_documents",
    "save_documents",
    "recent_window",
    "embed_documents",
    "Embedder",
    "EmbeddingOutcome",
    "HashingEmbedder",
    "cosine_similarity",
    "average_vectors",
    "chunk_text",
    "embed_document",
    "KeywordScorer",
    "KeywordVocabulary",
    "load_vocabulary",
    "RetrievalConfig",
    "QueryExpander",
    "MaxScoreTable",
    "aggregate_scores",
    "select_candidates",
    "WeightedReranker",
    "extract_snippets",
    "RetrievalPipeline",
    "ScoredCandidate",
    "RerankedCandidate",
    "RetrievalResult",
    "ContextBlock",
    "Reference",
    "tokenize",
]
