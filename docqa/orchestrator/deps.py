"""
Build the document assistant from environment configuration.
"""

from __future__ import annotations

from docqa.generation import AnswerGenerator, GenerationConfig
from docqa.llm import client_from_env
from docqa.rag import QueryExpander, RetrievalConfig, RetrievalPipeline

from .agent import DocumentAssistant


def build_assistant(
    config: RetrievalConfig | None = None,
    generation_config: GenerationConfig | None = None,
) -> DocumentAssistant:
    """
    Wire pipeline, expander and generator.

    Without an LLM API key, query expansion repeats the question and
    answers are composed from snippets.
    """
    config = config or RetrievalConfig.from_env()
    client = client_from_env()
    expander = QueryExpander(client=client, num_variations=config.num_variations)
    pipeline = RetrievalPipeline.create(config=config, expander=expander)
    generator = AnswerGenerator(client, generation_config) if client is not None else None
    return DocumentAssistant(pipeline=pipeline, generator=generator)
