"""
Document records, JSONL loading and embedding helpers.
"""

from __future__ import annotations

import asyncio
import dataclasses
import datetime as dt
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .chunker import DEFAULT_MAX_LEN, DEFAULT_OVERLAP, embed_document
from .embedder import Embedder


@dataclasses.dataclass(frozen=True)
class Document:
    """A company document as supplied by the document store."""

    id: str
    title: str
    updated_at: dt.datetime
    content: Optional[str] = None
    embedding: Optional[List[float]] = None


def parse_timestamp(value: Any) -> dt.datetime:
    """Parse an ISO-8601 string or datetime; naive values are taken as UTC."""
    if isinstance(value, dt.datetime):
        ts = value
    elif isinstance(value, (int, float)):
        ts = dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)
    elif isinstance(value, str) and value:
        ts = dt.datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"invalid timestamp: {value!r}")
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=dt.timezone.utc)
    return ts


def document_from_dict(obj: Dict[str, Any]) -> Document:
    """Build a Document from a JSON object."""
    embedding = obj.get("embedding")
    return Document(
        id=str(obj.get("id") or obj["_id"]),
        title=obj.get("title", ""),
        content=obj.get("content"),
        embedding=[float(x) for x in embedding] if embedding else None,
        updated_at=parse_timestamp(obj.get("updated_at") or obj.get("updatedAt")),
    )


def document_to_dict(doc: Document) -> Dict[str, Any]:
    """Serialize a Document to a JSON-compatible dict."""
    return {
        "id": doc.id,
        "title": doc.title,
        "content": doc.content,
        "embedding": list(doc.embedding) if doc.embedding is not None else None,
        "updated_at": doc.updated_at.isoformat(),
    }


def load_documents(path: Path) -> List[Document]:
    """Load documents from a JSONL file."""
    if not path.exists():
        raise FileNotFoundError(f"documents file not found at {path}")

    documents: List[Document] = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            documents.append(document_from_dict(json.loads(line)))
    return documents


def save_documents(documents: Iterable[Document], path: Path) -> None:
    """Write documents to a JSONL file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        for doc in documents:
            f.write(json.dumps(document_to_dict(doc), ensure_ascii=False) + "\n")


def recent_window(documents: Sequence[Document], limit: int = 50) -> List[Document]:
    """Most recently updated documents first, capped at limit."""
    ordered = sorted(documents, key=lambda d: d.updated_at, reverse=True)
    return ordered[:limit]


async def embed_documents(
    embedder: Embedder,
    documents: Sequence[Document],
    *,
    max_len: int = DEFAULT_MAX_LEN,
    overlap: int = DEFAULT_OVERLAP,
    overwrite: bool = False,
) -> List[Document]:
    """
    Return copies of documents with chunk-averaged embeddings filled in.

    The content is embedded when present, otherwise the title. Documents
    that already carry an embedding are kept as they are unless overwrite
    is set.
    """

    async def _embed(doc: Document) -> Document:
        if doc.embedding is not None and not overwrite:
            return doc
        text = (doc.content or "").strip() or doc.title
        if not text:
            return doc
        vector = await embed_document(embedder, text, max_len=max_len, overlap=overlap)
        return dataclasses.replace(doc, embedding=[float(x) for x in vector])

    return list(await asyncio.gather(*(_embed(d) for d in documents)))
