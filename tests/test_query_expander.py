"""
Tests for multi-query expansion and its fallbacks.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from docqa.rag.query_expander import QueryExpander, parse_rewrites

QUESTION = "Can I work from home?"


def _client(reply: str = "", side_effect: Exception | None = None) -> MagicMock:
    client = MagicMock()
    client.generate_single.return_value = reply
    if side_effect is not None:
        client.generate_single.side_effect = side_effect
    return client


def test_parse_rewrites_drops_numbering_and_bullets():
    text = "1. first\n2) second\n- third\n• fourth\n* fifth\n\nKeep me\n  And me  \n"
    assert parse_rewrites(text) == ["Keep me", "And me"]


def test_parse_rewrites_limit():
    text = "\n".join(f"Question {c}?" for c in "abcdefg")
    assert parse_rewrites(text, limit=5) == [f"Question {c}?" for c in "abcde"]


@pytest.mark.anyio
async def test_no_client_repeats_original():
    expander = QueryExpander()
    assert await expander.expand(QUESTION) == [QUESTION] * 5


@pytest.mark.anyio
async def test_pads_short_rewrites_with_original():
    client = _client("Is remote work allowed?\nMay I telecommute?")
    expander = QueryExpander(client=client)
    result = await expander.expand(QUESTION)
    assert result == [
        "Is remote work allowed?",
        "May I telecommute?",
        QUESTION,
        QUESTION,
        QUESTION,
    ]
    client.generate_single.assert_called_once()
    _, kwargs = client.generate_single.call_args
    assert "exactly 5" in kwargs["system"]


@pytest.mark.anyio
async def test_takes_at_most_five():
    client = _client("\n".join(f"Rewrite {i}" for i in range(8)))
    result = await QueryExpander(client=client).expand(QUESTION)
    assert result == [f"Rewrite {i}" for i in range(5)]


@pytest.mark.anyio
async def test_unusable_reply_falls_back():
    client = _client("1. numbered only\n- bullet only\n")
    assert await QueryExpander(client=client).expand(QUESTION) == [QUESTION] * 5


@pytest.mark.anyio
async def test_client_error_falls_back():
    client = _client(side_effect=RuntimeError("connection reset"))
    assert await QueryExpander(client=client).expand(QUESTION) == [QUESTION] * 5


@pytest.mark.anyio
async def test_working_set_puts_original_first():
    client = _client("A\nB\nC\nD\nE")
    queries = await QueryExpander(client=client).working_set(QUESTION)
    assert queries == [QUESTION, "A", "B", "C", "D", "E"]
