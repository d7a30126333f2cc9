"""Configuration for answer generation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GenerationConfig:
    """Settings for RAG answer generation."""

    max_tokens: int = 800
    temperature: float = 0.2
    top_p: float = 1.0
