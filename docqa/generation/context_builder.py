"""
Context builder for RAG answer generation.

Formats ranked documents and their snippets into LLM-ready text blocks.
"""

from __future__ import annotations

from typing import List, Sequence

from docqa.rag.retriever import ContextBlock, Reference, RetrievalResult


def context_blocks(results: Sequence[RetrievalResult]) -> List[ContextBlock]:
    """One block per ranked document, in rank order."""
    return [
        ContextBlock(
            document_id=r.document.id,
            title=r.document.title,
            snippets=list(r.snippets),
        )
        for r in results
    ]


def references_for(results: Sequence[RetrievalResult]) -> List[Reference]:
    """Lightweight citations for the documents used."""
    return [Reference(document_id=r.document.id, title=r.document.title) for r in results]


def build_context(blocks: Sequence[ContextBlock]) -> str:
    """
    Format context blocks into a single string.

    Each block looks like:

        Title: Leave Policy
        Snippets:
        - first snippet
        - second snippet
    """
    if not blocks:
        return ""
    parts = [
        f"Title: {b.title}\nSnippets:\n- " + "\n- ".join(b.snippets)
        for b in blocks
    ]
    return "\n\n".join(parts)
