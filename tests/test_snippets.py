"""
Tests for snippet extraction.
"""

from __future__ import annotations

from docqa.rag.snippets import extract_snippets

POLICY = (
    "Employees must give one month's written notice to resign. "
    "The annual review happens every spring. "
    "Remote work is allowed two days per week."
)


def test_no_content_falls_back_to_title():
    assert extract_snippets("anything", "Leave Policy", None) == ["Leave Policy"]
    assert extract_snippets("anything", "Leave Policy", "   ") == ["Leave Policy"]
    assert extract_snippets("anything", "", "") == []


def test_exact_phrase_returns_containing_sentence():
    snippets = extract_snippets("written notice to resign", "Policy", POLICY, 3)
    assert snippets == ["Employees must give one month's written notice to resign."]


def test_keyword_ranked_sentences():
    snippets = extract_snippets(
        "How much notice do I need to give if I want to resign?", "Policy", POLICY, 3
    )
    assert snippets == ["Employees must give one month's written notice to resign."]


def test_max_snippets_respected():
    content = "Remote work is fine. Remote work from home is fine. Nothing else."
    snippets = extract_snippets("remote home", "Policy", content, 1)
    assert snippets == ["Remote work from home is fine."]


def test_long_sentences_truncated():
    long_sentence = "Remote " + "x" * 300 + "."
    snippets = extract_snippets("remote policy", "Policy", long_sentence, 2)
    assert len(snippets) == 1
    assert len(snippets[0]) == 201
    assert snippets[0].endswith("…")


def test_no_match_uses_first_sentence():
    snippets = extract_snippets("parking permits", "Policy", POLICY, 2)
    assert snippets == ["Employees must give one month's written notice to resign."]


def test_only_first_forty_sentences_scored():
    filler = " ".join(f"Filler line {i}." for i in range(45))
    content = filler + " Parking permits are issued monthly."
    snippets = extract_snippets("parking permits issued", "Policy", content, 2)
    assert snippets == ["Filler line 0."]
