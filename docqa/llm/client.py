"""
LLM client for OpenAI-compatible chat APIs (Groq, OpenAI, local servers, etc.).
"""

from __future__ import annotations

import logging
import os
import random
import time
from pathlib import Path
from typing import Iterator, List, Optional

from dotenv import load_dotenv
from openai import OpenAI

# Load .env file if it exists
project_root = Path(__file__).resolve().parents[2]
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "openai/gpt-oss-20b"

logger = logging.getLogger(__name__)


def _resolve_client_params(
    model_name: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> tuple[str, str, str]:
    """Resolve model, api_key, base_url from args or env."""
    key = api_key or os.getenv("LLM_API_KEY") or os.getenv("AI_API_KEY") or ""
    base = base_url or os.getenv("LLM_BASE_URL") or DEFAULT_BASE_URL
    model = model_name or os.getenv("LLM_MODEL") or DEFAULT_MODEL
    return model, key, base


def _is_rate_limit(error: Exception) -> bool:
    error_str = str(error)
    return "429" in error_str or "rate limit" in error_str.lower() or "concurrency" in error_str.lower()


class ChatClient:
    """OpenAI-compatible chat client."""

    def __init__(
        self,
        model_name: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        self.model_name, key, self.base_url = _resolve_client_params(
            model_name=model_name, api_key=api_key, base_url=base_url
        )
        if not key:
            raise ValueError("API key required. Set LLM_API_KEY (or AI_API_KEY).")
        self.client = OpenAI(base_url=self.base_url, api_key=key)

    @staticmethod
    def _messages(prompt: str, system: Optional[str]) -> List[dict]:
        messages: List[dict] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    def generate_single(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 800,
        temperature: float = 0.2,
        top_p: float = 1.0,
        max_retries: int = 3,
    ) -> str:
        """Generate text for a single prompt; returns "" when the call fails."""
        results = self.generate([prompt], system, max_tokens, temperature, top_p, max_retries)
        return results[0] if results else ""

    def generate(
        self,
        prompts: List[str],
        system: Optional[str] = None,
        max_tokens: int = 800,
        temperature: float = 0.2,
        top_p: float = 1.0,
        max_retries: int = 3,
    ) -> List[str]:
        """Generate text for a batch of prompts with rate limiting."""
        results: List[str] = []
        for i, prompt in enumerate(prompts):
            retry_count = 0
            while retry_count < max_retries:
                try:
                    response = self.client.chat.completions.create(
                        model=self.model_name,
                        messages=self._messages(prompt, system),
                        max_tokens=max_tokens,
                        temperature=temperature,
                        top_p=top_p,
                    )

                    if response.choices:
                        generated_text = response.choices[0].message.content or ""
                        if not generated_text.strip():
                            logger.warning(
                                "Empty content in response for prompt %s (finish_reason=%s)",
                                i + 1,
                                getattr(response.choices[0], "finish_reason", "?"),
                            )
                        results.append(generated_text.strip())
                    else:
                        logger.warning("Empty response from API for prompt %s", i + 1)
                        results.append("")

                    # Space out batch requests to stay under provider concurrency limits
                    if i < len(prompts) - 1:
                        time.sleep(1.0 + random.uniform(0, 0.5))
                    break

                except Exception as e:
                    if not _is_rate_limit(e):
                        logger.error("Error calling API: %s", e)
                        results.append("")
                        break
                    retry_count += 1
                    if retry_count >= max_retries:
                        logger.warning("Rate limit exceeded after %s retries. Skipping prompt.", max_retries)
                        results.append("")
                        break
                    backoff = (2 ** retry_count) + random.uniform(0, 1.0)
                    logger.warning(
                        "Rate limit hit. Retrying in %s s (attempt %s/%s)",
                        round(backoff, 1),
                        retry_count,
                        max_retries,
                    )
                    time.sleep(backoff)

        return results

    def stream(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 800,
        temperature: float = 0.2,
        top_p: float = 1.0,
    ) -> Iterator[str]:
        """Stream text generation for a single prompt."""
        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=self._messages(prompt, system),
                max_tokens=max_tokens,
                temperature=temperature,
                top_p=top_p,
                stream=True,
            )
            for chunk in response:
                if chunk.choices and chunk.choices[0].delta.content is not None:
                    yield chunk.choices[0].delta.content

        except Exception as e:
            logger.error("Error streaming from API: %s", e)
            yield ""


def create_client(
    model_name: Optional[str] = None,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
) -> ChatClient:
    """Create an OpenAI-compatible client; raises ValueError without an API key."""
    return ChatClient(model_name=model_name, api_key=api_key, base_url=base_url)


def client_from_env() -> Optional[ChatClient]:
    """Create a client when an API key is configured, otherwise None."""
    _, key, _ = _resolve_client_params()
    if not key:
        logger.info("No LLM API key configured; using deterministic fallbacks")
        return None
    return create_client()
