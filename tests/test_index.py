"""
Tests for document loading, recency window and document embeddings.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import pytest

from docqa.rag import Document, HashingEmbedder, embed_documents, load_documents, recent_window
from docqa.rag.index import parse_timestamp, save_documents


@pytest.fixture
def documents_file(tmp_path: Path) -> Path:
    path = tmp_path / "documents.jsonl"
    rows = [
        {"id": "a", "title": "Leave", "content": "Annual leave is 25 days.", "updated_at": "2026-10-01T09:00:00Z"},
        {"_id": "b", "title": "Handbook", "updatedAt": "2026-10-10T09:00:00"},
        {"id": "c", "title": "Remote", "content": "Work from home.", "embedding": [0.6, 0.8], "updated_at": "2026-09-01T00:00:00+00:00"},
    ]
    path.write_text("\n".join(json.dumps(r) for r in rows) + "\n\n", encoding="utf-8")
    return path


def test_load_documents(documents_file: Path):
    docs = load_documents(documents_file)
    assert [d.id for d in docs] == ["a", "b", "c"]
    assert docs[1].content is None
    assert docs[1].updated_at.tzinfo is not None
    assert docs[2].embedding == [0.6, 0.8]


def test_load_documents_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_documents(tmp_path / "nope.jsonl")


def test_save_and_reload(tmp_path: Path, documents_file: Path):
    docs = load_documents(documents_file)
    out = tmp_path / "out" / "docs.jsonl"
    save_documents(docs, out)
    assert load_documents(out) == docs


def test_parse_timestamp():
    ts = parse_timestamp("2026-10-01T09:00:00Z")
    assert ts == dt.datetime(2026, 10, 1, 9, tzinfo=dt.timezone.utc)
    with pytest.raises(ValueError):
        parse_timestamp(None)


def test_recent_window(documents_file: Path):
    docs = load_documents(documents_file)
    assert [d.id for d in recent_window(docs, limit=2)] == ["b", "a"]


@pytest.mark.anyio
async def test_embed_documents(documents_file: Path):
    docs = load_documents(documents_file)
    embedder = HashingEmbedder()
    embedded = await embed_documents(embedder, docs)
    assert len(embedded[0].embedding) == embedder.dimension
    # title is embedded when there is no content
    assert embedded[1].embedding == [float(x) for x in embedder.embed_sync("Handbook")]
    # existing embeddings are kept
    assert embedded[2].embedding == [0.6, 0.8]
    assert docs[0].embedding is None

    refreshed = await embed_documents(embedder, docs, overwrite=True)
    assert len(refreshed[2].embedding) == embedder.dimension


def test_document_is_immutable():
    doc = Document(id="x", title="t", updated_at=dt.datetime.now(dt.timezone.utc))
    with pytest.raises(AttributeError):
        doc.title = "changed"  # type: ignore[misc]
