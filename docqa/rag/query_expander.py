"""
Multi-query expansion: paraphrase the question with an LLM, falling back to
repeating the original when no backend is available.
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from ..llm.client import ChatClient

logger = logging.getLogger(__name__)

NUM_VARIATIONS = 5

REWRITE_SYSTEM_PROMPT = (
    "You are a query rewriting assistant. Given a user's question, generate exactly "
    "5 different ways to ask the same question using different words, phrasings, and "
    "synonyms. Each rewrite should be semantically equivalent but use different "
    "vocabulary. IMPORTANT: You must return exactly 5 queries, one per line, no "
    "numbering, no bullets, no extra text. Each line should be a complete question."
)

REWRITE_USER_PROMPT = (
    'Original question: "{query}"\n\n'
    "Generate 5 different ways to ask this same question:"
)

_NUMBERED_RE = re.compile(r"^\d+[.)]")
_BULLETS = ("-", "•", "*")


def parse_rewrites(text: str, limit: int = NUM_VARIATIONS) -> List[str]:
    """Keep non-empty lines that are not numbered or bulleted."""
    rewrites: List[str] = []
    for line in (text or "").splitlines():
        line = line.strip()
        if not line or _NUMBERED_RE.match(line) or line.startswith(_BULLETS):
            continue
        rewrites.append(line)
        if len(rewrites) >= limit:
            break
    return rewrites


@dataclass
class QueryExpander:
    """Produce paraphrases of a question for broader recall."""

    client: Optional[ChatClient] = None
    num_variations: int = NUM_VARIATIONS
    temperature: float = 0.8
    max_tokens: int = 300

    def _fallback(self, query: str) -> List[str]:
        return [query] * self.num_variations

    async def expand(self, query: str) -> List[str]:
        """Return exactly num_variations paraphrases; never raises."""
        if self.client is None:
            return self._fallback(query)

        try:
            content = await asyncio.to_thread(
                self.client.generate_single,
                REWRITE_USER_PROMPT.format(query=query),
                system=REWRITE_SYSTEM_PROMPT,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            logger.warning("Query rewriting failed: %s", e)
            return self._fallback(query)

        rewrites = parse_rewrites(content, limit=self.num_variations)
        if not rewrites:
            logger.info("Query rewriting returned nothing usable; using original query")
            return self._fallback(query)

        while len(rewrites) < self.num_variations:
            rewrites.append(query)
        return rewrites

    async def working_set(self, query: str) -> List[str]:
        """The original question followed by its paraphrases."""
        variations = await self.expand(query)
        logger.debug("Query variations: %s", variations)
        return [query, *variations]
