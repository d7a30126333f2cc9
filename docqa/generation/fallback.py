"""
Deterministic plain-text answers, used when no LLM backend is available.
"""

from __future__ import annotations

from typing import List, Sequence

from docqa.rag.retriever import ContextBlock

NO_DOCUMENTS_MESSAGE = "No matching documents were found."


def compose_fallback_answer(question: str, blocks: Sequence[ContextBlock]) -> str:
    """List each document title followed by its snippets."""
    header = f'You asked: "{question}"\n\n'
    if not blocks:
        return header + NO_DOCUMENTS_MESSAGE

    lines: List[str] = ["Based on documents:"]
    for b in blocks:
        lines.append(f"- {b.title}:")
        lines.extend(f"  - {s}" for s in b.snippets)
    return header + "\n".join(lines)
