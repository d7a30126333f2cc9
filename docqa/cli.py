"""
Command-line entry point for asking questions over a JSONL document dump.

Recommended usage (run as a module so package imports work):

    python -m docqa.cli ask --documents data/documents.jsonl "How much notice do I need to give?"
    python -m docqa.cli embed --documents data/documents.jsonl --output data/embedded.jsonl
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import List

from docqa.orchestrator import build_assistant
from docqa.rag import (
    HashingEmbedder,
    RetrievalConfig,
    embed_documents,
    load_documents,
    save_documents,
)


async def _ask(args: argparse.Namespace) -> None:
    config = RetrievalConfig.from_env()
    if args.timeout is not None:
        config.timeout = args.timeout
    documents = load_documents(Path(args.documents))
    assistant = build_assistant(config)

    response = await assistant.answer(args.question, documents)
    print(response.answer)

    if response.references:
        print("\nReferences:")
        for ref in response.references:
            print(f"- {ref.title} ({ref.document_id})")

    if args.show_scores:
        print("\nScores:")
        for c in response.ranked:
            print(
                f"- {c.document.title}: combined={c.combined_score:.4f} "
                f"max={c.max_score:.4f} similarity={c.similarity_component:.4f} "
                f"keyword={c.keyword_component:.4f} recency={c.recency_component:.4f}"
                + (" [exact]" if c.exact_match else "")
            )


async def _embed(args: argparse.Namespace) -> None:
    config = RetrievalConfig()
    documents = load_documents(Path(args.documents))
    embedder = HashingEmbedder(dimension=config.vector_dimension)
    embedded = await embed_documents(
        embedder,
        documents,
        max_len=config.chunk_max_len,
        overlap=config.chunk_overlap,
        overwrite=args.overwrite,
    )
    save_documents(embedded, Path(args.output))
    print(f"Wrote {len(embedded)} documents to {args.output}")


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Question answering over company documents."
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ask = sub.add_parser("ask", help="Answer a question from a JSONL document file.")
    ask.add_argument("question", help="Question to answer.")
    ask.add_argument("--documents", required=True, help="Path to documents JSONL.")
    ask.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Retrieval timeout in seconds (default: RETRIEVAL_TIMEOUT or none).",
    )
    ask.add_argument(
        "--show-scores",
        action="store_true",
        help="Print reranker score components for the ranked documents.",
    )

    embed = sub.add_parser("embed", help="Compute document embeddings.")
    embed.add_argument("--documents", required=True, help="Path to documents JSONL.")
    embed.add_argument("--output", required=True, help="Where to write the embedded JSONL.")
    embed.add_argument(
        "--overwrite",
        action="store_true",
        help="Recompute embeddings that are already present.",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "ask":
        asyncio.run(_ask(args))
    else:
        asyncio.run(_embed(args))


if __name__ == "__main__":
    main()
