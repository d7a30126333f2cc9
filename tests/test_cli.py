"""
Tests for the command-line entry point.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from docqa.cli import main
from docqa.rag import RetrievalPipeline, load_documents


@pytest.fixture
def documents_file(tmp_path: Path) -> Path:
    path = tmp_path / "documents.jsonl"
    rows = [
        {
            "id": "resign",
            "title": "Resignation Policy",
            "content": "Employees must give one month's written notice to resign.",
            "updated_at": "2026-10-01T09:00:00Z",
        },
        {
            "id": "remote",
            "title": "Remote Work Policy",
            "content": "Employees may work from home two days per week.",
            "updated_at": "2026-10-10T09:00:00Z",
        },
    ]
    path.write_text("\n".join(json.dumps(r) for r in rows), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _no_llm(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("LLM_API_KEY", raising=False)
    monkeypatch.delenv("AI_API_KEY", raising=False)


def test_ask_prints_fallback_answer(documents_file: Path, capsys: pytest.CaptureFixture[str]):
    main(["ask", "--documents", str(documents_file), "--show-scores", "How much notice do I need to give?"])
    out = capsys.readouterr().out
    assert out.startswith('You asked: "How much notice do I need to give?"')
    assert "References:" in out
    assert "- Resignation Policy (resign)" in out
    assert "Scores:" in out


def test_show_scores_reuses_answer_ranking(
    documents_file: Path,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
):
    calls = []
    original = RetrievalPipeline.retrieve

    async def counting_retrieve(self, question, documents, **kwargs):
        calls.append(question)
        return await original(self, question, documents, **kwargs)

    monkeypatch.setattr(RetrievalPipeline, "retrieve", counting_retrieve)
    main(["ask", "--documents", str(documents_file), "--show-scores", "written notice to resign"])
    out = capsys.readouterr().out
    assert calls == ["written notice to resign"]
    assert "- Resignation Policy: combined=" in out
    assert "[exact]" in out


def test_embed_writes_vectors(tmp_path: Path, documents_file: Path, capsys: pytest.CaptureFixture[str]):
    output = tmp_path / "embedded.jsonl"
    main(["embed", "--documents", str(documents_file), "--output", str(output)])
    assert "Wrote 2 documents" in capsys.readouterr().out
    docs = load_documents(output)
    assert all(len(d.embedding) == 384 for d in docs)


def test_command_required():
    with pytest.raises(SystemExit):
        main([])
